"""
TASKTRACK API - Task Router

CRUD endpoints for task management.
All endpoints require a session and are user-scoped.
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, status, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from tasktrack.database import get_database
from tasktrack.auth.dependencies import CurrentUser
from tasktrack.tasks.service import TaskService
from tasktrack.tasks.repository import TaskRepository, TaskRepositoryInterface
from tasktrack.tasks.schemas import (
    TaskWriteRequest,
    TaskReorderRequest,
    TaskResponse,
    TaskDeleteResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


async def get_task_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> TaskRepositoryInterface:
    """Dependency to get task repository instance."""
    return TaskRepository(db)


async def get_task_service(
    repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)]
) -> TaskService:
    """Dependency to get task service instance."""
    return TaskService(repository)


@router.get(
    "",
    response_model=List[TaskResponse],
    summary="List tasks",
)
async def list_tasks(
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> List[TaskResponse]:
    """All tasks of the authenticated user, newest first."""
    return await service.list_tasks(current_user.id)


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    request: TaskWriteRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Create a new task for the authenticated user.

    title and due_date are required; description defaults to "",
    priority to Low and recurring to false.
    """
    return await service.create_task(current_user.id, request)


@router.post(
    "/reorder",
    response_model=MessageResponse,
    summary="Reorder tasks (not persisted)",
)
async def reorder_tasks(
    request: TaskReorderRequest,
    current_user: CurrentUser,
) -> MessageResponse:
    # Task ordering is not stored; the request is accepted and dropped
    logger.debug(
        f"Reorder request from user {current_user.id}: task={request.task_id} position={request.new_position}"
    )
    return MessageResponse(message="Task reordering not implemented yet")


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
)
async def update_task(
    task_id: str,
    request: TaskWriteRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Replace the editable fields of a task.

    Returns 404 if the task doesn't exist or belongs to another user.
    """
    return await service.update_task(task_id, current_user.id, request)


@router.patch(
    "/{task_id}/complete",
    response_model=TaskResponse,
    summary="Toggle task completion",
)
async def complete_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Flip the task between Pending and Completed.

    Returns 404 if the task doesn't exist or belongs to another user.
    """
    return await service.toggle_complete(task_id, current_user.id)


@router.delete(
    "/{task_id}",
    response_model=TaskDeleteResponse,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskDeleteResponse:
    """
    Delete a task by ID.

    Returns 404 if the task doesn't exist or belongs to another user.
    """
    await service.delete_task(task_id, current_user.id)
    return TaskDeleteResponse(message="Task deleted successfully", id=task_id)
