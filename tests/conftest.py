"""
TASKTRACK API - Test Configuration

Shared fixtures for CI-safe testing without MongoDB.
"""

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from tasktrack.main import app
from tasktrack.auth.repository import InMemoryUserRepository
from tasktrack.auth.service import AuthService
from tasktrack.auth.dependencies import get_auth_service
from tasktrack.tasks.repository import InMemoryTaskRepository
from tasktrack.tasks.router import get_task_repository
from tasktrack.database import get_database


@pytest.fixture
def user_repository():
    """A fresh in-memory user repository for each test."""
    return InMemoryUserRepository()


@pytest.fixture
def task_repository():
    """A fresh in-memory task repository for each test."""
    return InMemoryTaskRepository()


@pytest.fixture
def auth_service(user_repository):
    return AuthService(user_repository)


@pytest.fixture
def overrides(auth_service, task_repository):
    """Swap MongoDB-backed dependencies for in-memory ones."""
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_task_repository] = lambda: task_repository
    # Nothing should reach the database, but keep it resolvable
    app.dependency_overrides[get_database] = lambda: MagicMock()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def make_client(overrides):
    """Factory for independent clients, each with its own cookie jar."""
    def _make(**kwargs) -> TestClient:
        return TestClient(app, **kwargs)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def user_payload():
    return {
        "name": "Test User",
        "email": "test@example.com",
        "phone": "555-0100",
        "password": "testpassword123",
    }


@pytest.fixture
def second_user_payload():
    return {
        "name": "Second User",
        "email": "second@example.com",
        "phone": "555-0200",
        "password": "secondpassword123",
    }


@pytest.fixture
def auth_client(client, user_payload):
    """A client holding the session cookie of a freshly registered user."""
    response = client.post("/api/auth/register", json=user_payload)
    assert response.status_code == 201
    return client


@pytest.fixture
def second_auth_client(make_client, second_user_payload):
    second = make_client()
    response = second.post("/api/auth/register", json=second_user_payload)
    assert response.status_code == 201
    return second


def iso_in(delta: timedelta) -> str:
    return (datetime.now(timezone.utc) + delta).isoformat()


@pytest.fixture
def tomorrow() -> str:
    return iso_in(timedelta(days=1))


# Time control for deterministic filter testing
class FrozenClock:
    """A clock that returns a fixed time for deterministic testing."""

    def __init__(self, frozen_time: datetime):
        self._frozen_time = frozen_time

    def __call__(self) -> datetime:
        return self._frozen_time

    def set(self, new_time: datetime) -> None:
        self._frozen_time = new_time

    def advance(self, delta: timedelta) -> None:
        self._frozen_time += delta


@pytest.fixture
def frozen_now() -> datetime:
    """A fixed 'now' time for testing."""
    return datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def frozen_clock(frozen_now) -> FrozenClock:
    return FrozenClock(frozen_now)
