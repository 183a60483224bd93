"""
TASKTRACK API - Authentication Module

Register/login with JWT session cookies.
"""

from tasktrack.auth.router import router as auth_router
from tasktrack.auth.dependencies import get_current_user, CurrentUser

__all__ = ["auth_router", "get_current_user", "CurrentUser"]
