from pydantic import BaseModel
from typing import Optional


# Fields are optional so that missing values reach the service, which
# reports them with the same 400 as empty ones.
class SignupRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UpdateProfileRequest(BaseModel):
    profile_picture: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
