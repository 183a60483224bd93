"""
TASKTRACK API - Task Service

Business logic for ownership-scoped task operations.
"""

import logging
from typing import List

from tasktrack.database import storage_errors
from tasktrack.errors import NotFoundError, ValidationError
from tasktrack.tasks.models import Task, as_utc
from tasktrack.tasks.repository import TaskRepositoryInterface
from tasktrack.tasks.enums import TaskPriority
from tasktrack.tasks.schemas import TaskWriteRequest, TaskResponse

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


class TaskService:
    """Service layer for task business logic."""

    def __init__(self, repository: TaskRepositoryInterface):
        self.repository = repository

    @staticmethod
    def _validate(request: TaskWriteRequest) -> None:
        if not request.title or request.due_date is None:
            raise ValidationError("Title and due date are required")

    @staticmethod
    def _task_to_response(task: Task) -> TaskResponse:
        return TaskResponse(
            id=task.id,
            user_id=task.user_id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            priority=task.priority,
            status=task.status,
            recurring=task.recurring,
            created_at=task.created_at,
        )

    async def list_tasks(self, user_id: str) -> List[TaskResponse]:
        """List all tasks for the owner, newest first."""
        with storage_errors("Server error while fetching tasks"):
            tasks = await self.repository.list_by_owner(user_id)
        return [self._task_to_response(task) for task in tasks]

    async def create_task(self, user_id: str, request: TaskWriteRequest) -> TaskResponse:
        """Create a new pending task for the owner."""
        self._validate(request)
        task = Task.create(
            user_id=user_id,
            title=request.title,
            due_date=request.due_date,
            description=request.description or "",
            priority=request.priority or TaskPriority.LOW,
            recurring=bool(request.recurring),
        )
        with storage_errors("Server error while creating task"):
            await self.repository.create(task)
        logger.info(f"Created task {task.id} for user {user_id}")
        return self._task_to_response(task)

    async def update_task(
        self,
        task_id: str,
        user_id: str,
        request: TaskWriteRequest,
    ) -> TaskResponse:
        """Overwrite the editable fields of a task. Status is left alone."""
        self._validate(request)
        updates = {
            "title": request.title,
            "description": request.description or "",
            "due_date": as_utc(request.due_date),
            "priority": (request.priority or TaskPriority.LOW).value,
            "recurring": bool(request.recurring),
        }
        with storage_errors("Server error while updating task"):
            task = await self.repository.update(task_id, user_id, updates)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return self._task_to_response(task)

    async def toggle_complete(self, task_id: str, user_id: str) -> TaskResponse:
        """Flip a task between Pending and Completed."""
        with storage_errors("Server error while completing task"):
            task = await self.repository.toggle_status(task_id, user_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return self._task_to_response(task)

    async def delete_task(self, task_id: str, user_id: str) -> None:
        """Delete a task permanently."""
        with storage_errors("Server error while deleting task"):
            deleted = await self.repository.delete(task_id, user_id)
        if not deleted:
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info(f"Deleted task {task_id} for user {user_id}")
