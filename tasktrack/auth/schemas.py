"""
TASKTRACK API - Authentication Schemas

Pydantic models for authentication requests and responses.
Required fields are declared optional so the service can report
missing values with its own messages.
"""

from typing import Optional

from pydantic import BaseModel


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None


class UserLoginRequest(BaseModel):
    """Request schema for user login."""

    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public user information. Never carries the password hash."""

    id: str
    name: str
    email: str


class AuthResponse(BaseModel):
    """Response for register and login."""

    message: str
    user: UserResponse


class CurrentUserResponse(BaseModel):
    user: UserResponse


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
