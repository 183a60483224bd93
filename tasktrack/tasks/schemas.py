"""
TASKTRACK API - Task Schemas

Pydantic models for task API requests and responses.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tasktrack.tasks.enums import TaskStatus, TaskPriority


class TaskWriteRequest(BaseModel):
    """Request body shared by create (POST) and full update (PUT).

    title and due_date are required, but checked by the service so that
    a missing value is reported as a validation error with its own message.
    """

    title: Optional[str] = Field(default=None, max_length=500, description="Task title")
    description: Optional[str] = Field(default=None, max_length=5000, description="Task description")
    due_date: Optional[datetime] = Field(default=None, description="Due date and time")
    priority: Optional[TaskPriority] = Field(default=None, description="Task priority, Low if omitted")
    recurring: Optional[bool] = Field(default=None, description="Recurring flag, false if omitted")

    @field_validator("title", "description", "due_date", "priority", mode="before")
    @classmethod
    def _blank_as_missing(cls, value):
        if isinstance(value, str) and value == "":
            return None
        return value


class TaskReorderRequest(BaseModel):
    """Drag-and-drop reorder request. Accepted but not persisted."""

    model_config = ConfigDict(populate_by_name=True)

    task_id: Optional[str] = Field(default=None, alias="taskId")
    new_position: Optional[int] = Field(default=None, alias="newPosition")


class TaskResponse(BaseModel):
    """Response model for a single task."""

    id: str = Field(description="Task ID")
    user_id: str = Field(description="Owner user ID")
    title: str = Field(description="Task title")
    description: str = Field(default="", description="Task description")
    due_date: datetime = Field(description="Due date and time")
    priority: TaskPriority = Field(description="Task priority")
    status: TaskStatus = Field(description="Task status")
    recurring: bool = Field(default=False, description="Recurring flag")
    created_at: datetime = Field(description="Creation timestamp")


class TaskDeleteResponse(BaseModel):
    """Response model for task deletion."""

    message: str = Field(description="Success message")
    id: str = Field(description="Deleted task ID")


class MessageResponse(BaseModel):
    message: str
