"""Test fixtures for the auth API.

Provides a MockSupabase that mimics the supabase-py table query builder
(``table().select().eq().limit().execute()``, ``insert``, ``update``) over
in-memory rows, and a stub profile picture storage. The FastAPI app gets both
through ``dependency_overrides``.
"""

from __future__ import annotations

import os

# Settings are read once at import time, so the environment has to be in place
# before anything under app/ is imported.
os.environ.setdefault("JWT_SECRET", "test-secret-that-is-long-enough-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")

import uuid
from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import get_profile_picture_storage
from app.database.supabase_client import get_supabase
from app.main import app

# ============================================================================
# Mock Supabase client
# ============================================================================


class MockResponse:
    """Mimics postgrest APIResponse: rows live in ``.data``."""

    def __init__(self, data: list[dict[str, Any]]) -> None:
        self.data = data


class MockQuery:
    def __init__(self, db: MockSupabase, table: str) -> None:
        self.db = db
        self.table = table
        self.action = "select"
        self.payload: dict[str, Any] | None = None
        self.filters: list[tuple[str, Any]] = []
        self.row_limit: int | None = None

    def select(self, *columns: str) -> MockQuery:
        self.action = "select"
        return self

    def insert(self, payload: dict[str, Any]) -> MockQuery:
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, payload: dict[str, Any]) -> MockQuery:
        self.action = "update"
        self.payload = payload
        return self

    def eq(self, column: str, value: Any) -> MockQuery:
        self.filters.append((column, value))
        return self

    def limit(self, count: int) -> MockQuery:
        self.row_limit = count
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self) -> MockResponse:
        self.db.calls.append((self.table, self.action))
        if self.action in self.db.failures:
            raise self.db.failures[self.action]
        if self.action in self.db.empty_actions:
            return MockResponse([])

        rows = self.db.tables.setdefault(self.table, [])

        if self.action == "insert":
            row = {
                "id": str(uuid.uuid4()),
                "profile_picture": None,
                "created_at": datetime.now(timezone.utc).isoformat(),
                "updated_at": None,
                **(self.payload or {}),
            }
            rows.append(row)
            return MockResponse([dict(row)])

        matched = [row for row in rows if self._matches(row)]
        if self.action == "update":
            for row in matched:
                row.update(self.payload or {})
            return MockResponse([dict(row) for row in matched])

        if self.row_limit is not None:
            matched = matched[: self.row_limit]
        return MockResponse([dict(row) for row in matched])


class MockSupabase:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[str, Exception] = {}
        self.empty_actions: set[str] = set()

    def table(self, name: str) -> MockQuery:
        return MockQuery(self, name)

    def fail(self, action: str, error: Exception) -> None:
        """Make every ``action`` (select/insert/update) raise ``error``."""
        self.failures[action] = error

    def empty(self, action: str) -> None:
        """Make every ``action`` return no rows without touching the table."""
        self.empty_actions.add(action)

    @property
    def users(self) -> list[dict[str, Any]]:
        return self.tables.setdefault("users", [])


# ============================================================================
# Stub profile picture storage
# ============================================================================


class StubStorage:
    def __init__(self) -> None:
        self.uploads: list[tuple[str, str]] = []
        self.error: Exception | None = None

    def upload(self, user_id: str, picture: str) -> str:
        if self.error is not None:
            raise self.error
        self.uploads.append((user_id, picture))
        return f"https://images.example.com/profile-pictures/{user_id}/{len(self.uploads)}.png"


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture()
def mock_supabase() -> MockSupabase:
    return MockSupabase()


@pytest.fixture()
def storage() -> StubStorage:
    return StubStorage()


@pytest.fixture()
def client(mock_supabase: MockSupabase, storage: StubStorage):
    app.dependency_overrides[get_supabase] = lambda: mock_supabase
    app.dependency_overrides[get_profile_picture_storage] = lambda: storage
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def ana(client: TestClient) -> dict[str, Any]:
    """A signed-up user; the client holds her session cookie."""
    response = client.post(
        "/api/auth/signup",
        json={"name": "Ana", "email": "a@x.com", "password": "secret1"},
    )
    assert response.status_code == 201
    return response.json()
