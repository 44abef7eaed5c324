from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Server
    port: int = 3000

    # Session tokens
    jwt_secret: str  # Required; the app refuses to start without it
    token_max_age_days: int = 7
    cookie_name: str = "token"
    bcrypt_rounds: int = 10

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    users_table: str = "users"

    # Profile picture hosting (will read from uppercase env vars automatically)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None
    s3_public_base_url: Optional[str] = None  # e.g. a CDN in front of the bucket
    profile_pictures_prefix: str = "profile-pictures"
    image_fetch_timeout: float = 10.0
    max_profile_picture_bytes: int = 5 * 1024 * 1024

    # App
    app_name: str = "auth-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"

    @field_validator("jwt_secret")
    @classmethod
    def _jwt_secret_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("JWT_SECRET must be set to a non-empty value")
        return value

    @field_validator("bcrypt_rounds")
    @classmethod
    def _bcrypt_rounds_in_range(cls, value: int) -> int:
        if not 4 <= value <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def token_max_age_seconds(self) -> int:
        return self.token_max_age_days * 24 * 60 * 60

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
