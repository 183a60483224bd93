"""
TASKTRACK Dashboard - Auth Session

Holds who is logged in for one dashboard instance. Passed explicitly to
whatever needs it instead of living in a global.
"""

import logging
from typing import Optional

from tasktrack.auth.schemas import UserResponse
from tasktrack.dashboard.client import ApiError, TaskTrackClient

logger = logging.getLogger(__name__)


class AuthSession:
    def __init__(self, client: TaskTrackClient):
        self.client = client
        self.user: Optional[UserResponse] = None
        self.loading = True
        self.error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    async def check_status(self) -> None:
        """Restore the user from an existing session cookie, if any."""
        try:
            self.user = await self.client.me()
        except ApiError:
            logger.debug("Not authenticated")
            self.user = None
        finally:
            self.loading = False

    async def login(self, email: str, password: str) -> UserResponse:
        self.error = None
        try:
            self.user = await self.client.login(email, password)
        except ApiError as e:
            self.error = e.message or "Login failed"
            raise
        return self.user

    async def register(self, name: str, email: str, phone: str, password: str) -> UserResponse:
        self.error = None
        try:
            self.user = await self.client.register(name, email, phone, password)
        except ApiError as e:
            self.error = e.message or "Registration failed"
            raise
        return self.user

    async def logout(self) -> None:
        try:
            await self.client.logout()
        except ApiError as e:
            self.error = e.message or "Logout failed"
            return
        self.user = None
