import logging
from typing import Optional

from fastapi import Response

from app.config import Settings
from app.core.errors import UnauthorizedError
from app.modules.auth.tokens import InvalidToken, TokenCodec
from app.modules.users.schemas import User
from app.modules.users.service import UserService

logger = logging.getLogger(__name__)

NO_TOKEN = "No Token Provided"
INVALID_TOKEN = "Invalid Token"
NO_USER = "No User Found"


class SessionCookie:
    """Writes and clears the session cookie"""

    def __init__(self, settings: Settings):
        self.name = settings.cookie_name
        self.max_age = settings.token_max_age_seconds
        self.secure = settings.is_production

    def set(self, response: Response, token: str) -> None:
        response.set_cookie(
            self.name,
            token,
            max_age=self.max_age,
            httponly=True,
            samesite="strict",
            secure=self.secure,
        )

    def clear(self, response: Response) -> None:
        response.set_cookie(
            self.name,
            "",
            max_age=0,
            httponly=True,
            samesite="strict",
            secure=self.secure,
        )


class SessionValidator:
    """Resolves a session token to the user it was issued for.

    Every call verifies the signature and re-reads the user; nothing is cached.
    """

    def __init__(self, codec: TokenCodec, users: UserService):
        self.codec = codec
        self.users = users

    def resolve(self, token: Optional[str]) -> User:
        if not token:
            raise UnauthorizedError(NO_TOKEN)

        try:
            user_id = self.codec.verify(token)
        except InvalidToken as e:
            logger.info("Rejected session token: %s", e)
            raise UnauthorizedError(INVALID_TOKEN)

        user = self.users.get_user_by_id(user_id)
        if user is None:
            logger.warning("Valid session token for unknown user %s", user_id)
            raise UnauthorizedError(NO_USER)
        return user
