"""
TASKTRACK API - Task Models

Internal task model for database operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid

from tasktrack.tasks.enums import TaskStatus, TaskPriority


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime, at storage precision."""
    return as_utc(datetime.now(timezone.utc))


def as_utc(value: datetime) -> datetime:
    """
    Normalize a datetime the way MongoDB will store it.

    Naive values are treated as UTC. Precision is cut to milliseconds so a
    stored task reads back equal to the one that was written.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


@dataclass
class Task:
    """Task entity for database storage."""

    id: str
    user_id: str
    title: str
    due_date: datetime
    description: str = ""
    priority: TaskPriority = TaskPriority.LOW
    status: TaskStatus = TaskStatus.PENDING
    recurring: bool = False
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(
        cls,
        user_id: str,
        title: str,
        due_date: datetime,
        description: str = "",
        priority: TaskPriority = TaskPriority.LOW,
        recurring: bool = False,
    ) -> "Task":
        """Create a new pending task with generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=title,
            due_date=as_utc(due_date),
            description=description,
            priority=priority,
            status=TaskStatus.PENDING,
            recurring=recurring,
            created_at=_utcnow(),
        )

    def to_dict(self) -> dict:
        """Convert task to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "due_date": self.due_date,
            "priority": self.priority.value,
            "status": self.status.value,
            "recurring": self.recurring,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create task from MongoDB document."""
        return cls(
            id=data["_id"],
            user_id=data["user_id"],
            title=data["title"],
            description=data.get("description") or "",
            due_date=as_utc(data["due_date"]),
            priority=TaskPriority(data.get("priority") or TaskPriority.LOW.value),
            status=TaskStatus(data.get("status") or TaskStatus.PENDING.value),
            recurring=bool(data.get("recurring", False)),
            created_at=as_utc(data["created_at"]),
        )
