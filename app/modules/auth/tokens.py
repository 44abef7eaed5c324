"""Session token signing and verification.

Tokens are HS256 JWTs whose only custom claim is ``sub``, the user id. They
are signed, not encrypted, and are never stored server-side.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt as pyjwt

ALGORITHM = "HS256"


class InvalidToken(Exception):
    """Token signature, format, expiry or claims did not check out."""


class TokenCodec:
    def __init__(self, secret: str, max_age: timedelta = timedelta(days=7)):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self.max_age = max_age

    def issue(self, subject_id: str) -> str:
        """Sign a token for ``subject_id`` that expires after ``max_age``."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(subject_id),
            "iat": now,
            "exp": now + self.max_age,
        }
        return pyjwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> str:
        """Decode ``token`` and return its subject id.

        Raises:
            InvalidToken: bad signature, malformed token, expired, or missing
                the ``sub``/``exp`` claims.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except pyjwt.InvalidTokenError as e:
            raise InvalidToken(str(e)) from e

        subject = payload["sub"]
        if not subject:
            raise InvalidToken("Token has an empty subject")
        return subject
