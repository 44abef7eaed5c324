from fastapi import APIRouter, Depends, Response
from app.modules.auth.schemas import (
    SignupRequest, LoginRequest, UpdateProfileRequest, MessageResponse
)
from app.modules.auth.service import AuthService
from app.modules.auth.session import SessionCookie
from app.modules.users.schemas import User, UserResponse
from app.core.dependencies import get_auth_service, get_current_user, get_session_cookie

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=201)
def signup(
    signup_data: SignupRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user and set the session cookie"""
    return service.signup(signup_data, response)


@router.post("/login", response_model=UserResponse)
def login(
    login_data: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Login and set the session cookie"""
    return service.login(login_data, response)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    cookie: SessionCookie = Depends(get_session_cookie)
):
    """Clear the session cookie. No session is required."""
    cookie.clear(response)
    return {"message": "Logged out successfully"}


@router.put("/update-profile", response_model=UserResponse)
def update_profile(
    profile_data: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    """Upload a new profile picture for the current user"""
    return service.update_profile(current_user, profile_data)


@router.get("/check", response_model=UserResponse)
def check_auth(
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    """Return the user the session cookie belongs to"""
    return service.check(current_user)
