"""
TASKTRACK Dashboard - client-side state

Async API client, auth session, task filters and the dashboard store
that keeps a local task list in step with the server.
"""

from tasktrack.dashboard.client import ApiError, TaskTrackClient
from tasktrack.dashboard.filters import PriorityFilter, StatusFilter
from tasktrack.dashboard.forms import TaskForm, validate_task_form
from tasktrack.dashboard.session import AuthSession
from tasktrack.dashboard.store import DashboardStore

__all__ = [
    "ApiError",
    "AuthSession",
    "DashboardStore",
    "PriorityFilter",
    "StatusFilter",
    "TaskForm",
    "TaskTrackClient",
    "validate_task_form",
]
