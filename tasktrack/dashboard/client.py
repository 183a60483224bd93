"""
TASKTRACK Dashboard - API Client

Thin async wrapper over the HTTP API. The session cookie set by
login/register lives in the underlying httpx cookie jar.
"""

import logging
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from tasktrack.config import settings
from tasktrack.auth.schemas import AuthResponse, CurrentUserResponse, UserResponse
from tasktrack.tasks.schemas import TaskResponse
from tasktrack.dashboard.forms import TaskForm

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_task_list = TypeAdapter(List[TaskResponse])


class ApiError(Exception):
    """A request failed. message is the server-provided text, when there was one."""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message or (f"HTTP {status_code}" if status_code else "Request failed"))


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def _parse(model: Type[ModelT], data: Any) -> ModelT:
    """Build a payload model. A body of the wrong shape is a failed request."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Unexpected {model.__name__} payload: {e}")
        raise ApiError() from e


class TaskTrackClient:
    """Client for the TaskTrack HTTP API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "TaskTrackClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError() from e

        if response.is_error:
            raise ApiError(_server_message(response), response.status_code)
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {path} returned a non-JSON body")
            raise ApiError(status_code=response.status_code) from e

    # ---------- auth ----------
    async def register(self, name: str, email: str, phone: str, password: str) -> UserResponse:
        data = await self._request(
            "POST",
            "/api/auth/register",
            json={"name": name, "email": email, "phone": phone, "password": password},
        )
        return _parse(AuthResponse, data).user

    async def login(self, email: str, password: str) -> UserResponse:
        data = await self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        return _parse(AuthResponse, data).user

    async def logout(self) -> None:
        await self._request("POST", "/api/auth/logout")
        # Drop the local copy even if the server's expiry header was not applied
        self._http.cookies.clear()

    async def me(self) -> UserResponse:
        data = await self._request("GET", "/api/auth/me")
        return _parse(CurrentUserResponse, data).user

    # ---------- tasks ----------
    async def list_tasks(self) -> List[TaskResponse]:
        data = await self._request("GET", "/api/tasks")
        try:
            return _task_list.validate_python(data)
        except ValidationError as e:
            logger.warning(f"Unexpected task list payload: {e}")
            raise ApiError() from e

    async def create_task(self, form: TaskForm) -> TaskResponse:
        data = await self._request("POST", "/api/tasks", json=form.to_payload())
        return _parse(TaskResponse, data)

    async def update_task(self, task_id: str, form: TaskForm) -> TaskResponse:
        data = await self._request("PUT", f"/api/tasks/{task_id}", json=form.to_payload())
        return _parse(TaskResponse, data)

    async def complete_task(self, task_id: str) -> TaskResponse:
        data = await self._request("PATCH", f"/api/tasks/{task_id}/complete")
        return _parse(TaskResponse, data)

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/api/tasks/{task_id}")

    async def reorder(self, task_id: str, new_position: int) -> None:
        await self._request(
            "POST",
            "/api/tasks/reorder",
            json={"taskId": task_id, "newPosition": new_position},
        )
