"""
Core dependencies: component wiring and the session gate for protected routes
"""

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from supabase import Client

from app.config import settings
from app.database.supabase_client import get_supabase
from app.modules.auth.passwords import PasswordHasher
from app.modules.auth.service import AuthService
from app.modules.auth.session import SessionCookie, SessionValidator
from app.modules.auth.tokens import TokenCodec
from app.modules.users.schemas import User
from app.modules.users.service import UserService
from app.modules.users.storage import ProfilePictureStorage

logger = logging.getLogger(__name__)


@lru_cache
def get_token_codec() -> TokenCodec:
    return TokenCodec(settings.jwt_secret, max_age=timedelta(days=settings.token_max_age_days))


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@lru_cache
def get_session_cookie() -> SessionCookie:
    return SessionCookie(settings)


@lru_cache
def get_profile_picture_storage() -> Optional[ProfilePictureStorage]:
    """None when no bucket is configured; profile updates then fail with a 500"""
    if not settings.s3_bucket_name:
        logger.warning("S3_BUCKET_NAME is not set; profile picture uploads are disabled")
        return None
    return ProfilePictureStorage(settings)


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase, table=settings.users_table)


def get_auth_service(
    users: UserService = Depends(get_user_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: TokenCodec = Depends(get_token_codec),
    cookie: SessionCookie = Depends(get_session_cookie),
    storage: Optional[ProfilePictureStorage] = Depends(get_profile_picture_storage),
) -> AuthService:
    return AuthService(users, hasher, codec, cookie, storage)


def get_current_user(
    request: Request,
    codec: TokenCodec = Depends(get_token_codec),
    users: UserService = Depends(get_user_service),
) -> User:
    """Resolve the session cookie to a user or stop the request with a 401"""
    token = request.cookies.get(settings.cookie_name)
    return SessionValidator(codec, users).resolve(token)
