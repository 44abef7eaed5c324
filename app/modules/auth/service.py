import logging
from typing import Optional

from fastapi import Response

from app.core.errors import ApplicationError, InternalError, ValidationError
from app.modules.auth.passwords import MAX_PASSWORD_BYTES, PasswordHasher
from app.modules.auth.schemas import LoginRequest, SignupRequest, UpdateProfileRequest
from app.modules.auth.session import SessionCookie
from app.modules.auth.tokens import TokenCodec
from app.modules.users.schemas import User, UserResponse
from app.modules.users.service import UserService
from app.modules.users.storage import ProfilePictureStorage

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

# Shared by unknown email and wrong password
INVALID_CREDENTIAL = "Invalid Credential"


class AuthService:
    def __init__(
        self,
        users: UserService,
        hasher: PasswordHasher,
        codec: TokenCodec,
        cookie: SessionCookie,
        storage: Optional[ProfilePictureStorage] = None,
    ):
        self.users = users
        self.hasher = hasher
        self.codec = codec
        self.cookie = cookie
        self.storage = storage

    def signup(self, signup_data: SignupRequest, response: Response) -> UserResponse:
        """Register a new user and start a session for them"""
        if not signup_data.name or not signup_data.email or not signup_data.password:
            raise ValidationError("Please fill in all fields")
        if len(signup_data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if len(signup_data.password.encode()) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

        try:
            if self.users.get_user_by_email(signup_data.email):
                raise ValidationError("User already exists")

            password_hash = self.hasher.hash(signup_data.password)
            user = self.users.create_user(signup_data.name, signup_data.email, password_hash)
            if user is None:
                logger.error("Insert returned no row for new user")
                raise InternalError()

            # Only persisted users get a session
            self._start_session(user, response)
            logger.info("User %s signed up", user.id)
            return UserResponse.from_user(user)
        except ApplicationError:
            raise
        except Exception:
            logger.exception("Signup failed")
            raise InternalError()

    def login(self, login_data: LoginRequest, response: Response) -> UserResponse:
        """Check credentials and start a session"""
        if not login_data.email or not login_data.password:
            raise ValidationError("Please fill in all fields")

        try:
            user = self.users.get_user_by_email(login_data.email)
            if user is None:
                logger.info("Login rejected: unknown email")
                raise ValidationError(INVALID_CREDENTIAL)

            if not self.hasher.verify(login_data.password, user.password):
                logger.info("Login rejected for user %s: wrong password", user.id)
                raise ValidationError(INVALID_CREDENTIAL)

            self._start_session(user, response)
            logger.info("User %s logged in", user.id)
            return UserResponse.from_user(user)
        except ApplicationError:
            raise
        except Exception:
            logger.exception("Login failed")
            raise InternalError()

    def update_profile(self, user: User, profile_data: UpdateProfileRequest) -> UserResponse:
        """Host a new profile picture and store its URL on the user"""
        if not profile_data.profile_picture:
            raise ValidationError("Please provide a profile picture")

        try:
            if self.storage is None:
                logger.error("Profile picture storage is not configured")
                raise InternalError()

            url = self.storage.upload(user.id, profile_data.profile_picture)
            updated = self.users.update_profile_picture(user.id, url)
            if updated is None:
                logger.error("Profile picture update matched no row for user %s", user.id)
                raise InternalError()

            logger.info("User %s updated profile picture", user.id)
            return UserResponse.from_user(updated)
        except ApplicationError:
            raise
        except Exception:
            logger.exception("Profile update failed")
            raise InternalError()

    def check(self, user: User) -> UserResponse:
        return UserResponse.from_user(user)

    def _start_session(self, user: User, response: Response) -> None:
        token = self.codec.issue(user.id)
        self.cookie.set(response, token)
