from typing import Annotated, Optional

from fastapi import Depends, Response
from fastapi.security import APIKeyCookie
from motor.motor_asyncio import AsyncIOMotorDatabase

from tasktrack.config import settings
from tasktrack.database import get_database
from tasktrack.auth.models import User
from tasktrack.auth.service import AuthService
from tasktrack.auth.repository import MongoUserRepository


# Session cookie scheme - auto_error=False to handle missing tokens ourselves
cookie_scheme = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


def get_auth_service(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> AuthService:
    """Dependency to get AuthService instance with MongoDB repository."""
    return AuthService(MongoUserRepository(db))


async def get_current_user(
    token: Annotated[Optional[str], Depends(cookie_scheme)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    return await auth_service.resolve_user(token)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


# Type alias for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
