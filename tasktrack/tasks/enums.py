"""
TASKTRACK API - Task Enums

Enum values are the exact strings stored and sent over the wire.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status values."""
    PENDING = "Pending"
    COMPLETED = "Completed"

    def toggled(self) -> "TaskStatus":
        return TaskStatus.COMPLETED if self is TaskStatus.PENDING else TaskStatus.PENDING


class TaskPriority(str, Enum):
    """Task priority levels."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
