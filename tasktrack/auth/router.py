"""
TASKTRACK API - Authentication Router

Endpoints for user registration, login, logout and current user info.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from tasktrack.auth.schemas import (
    UserRegisterRequest,
    UserLoginRequest,
    UserResponse,
    AuthResponse,
    CurrentUserResponse,
    MessageResponse,
)
from tasktrack.auth.service import AuthService
from tasktrack.auth.dependencies import (
    CurrentUser,
    get_auth_service,
    set_session_cookie,
    clear_session_cookie,
)


router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: UserRegisterRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Register a new user and start a session.

    - All of name, email, phone and password are required
    - Email and phone must not already be registered
    """
    user = await auth_service.register_user(
        name=request.name,
        email=request.email,
        phone=request.phone,
        password=request.password,
    )
    set_session_cookie(response, auth_service.create_access_token(user_id=user.id))
    return AuthResponse(
        message="User registered successfully",
        user=UserResponse(**user.public_fields()),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and start a session",
)
async def login(
    request: UserLoginRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate a user and set the http-only session cookie.
    """
    user = await auth_service.authenticate_user(
        email=request.email,
        password=request.password,
    )
    set_session_cookie(response, auth_service.create_access_token(user_id=user.id))
    return AuthResponse(
        message="Login successful",
        user=UserResponse(**user.public_fields()),
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="End the current session",
)
async def logout(response: Response) -> MessageResponse:
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Get current user info",
)
async def get_me(current_user: CurrentUser) -> CurrentUserResponse:
    """
    Get the current authenticated user's public information.

    Requires a valid session cookie.
    """
    return CurrentUserResponse(user=UserResponse(**current_user.public_fields()))
