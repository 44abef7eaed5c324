from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class User(BaseModel):
    """A row of the users table, password hash included. Never returned to clients."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    email: str
    password: str
    profile_picture: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    profile_picture: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            profile_picture=user.profile_picture,
        )
