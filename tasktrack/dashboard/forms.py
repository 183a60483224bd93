"""
TASKTRACK Dashboard - Task Form

Values entered for a new or edited task, and the checks run before
they are sent to the server.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

from tasktrack.tasks.enums import TaskPriority
from tasktrack.tasks.models import as_utc
from tasktrack.tasks.schemas import TaskResponse


@dataclass
class TaskForm:
    title: str = ""
    description: str = ""
    due_date: Optional[datetime] = None
    priority: TaskPriority = TaskPriority.LOW
    recurring: bool = False

    @classmethod
    def from_task(cls, task: TaskResponse) -> "TaskForm":
        """Prefill the form for editing an existing task."""
        return cls(
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            priority=task.priority,
            recurring=task.recurring,
        )

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "priority": self.priority.value,
            "recurring": self.recurring,
        }


def validate_task_form(form: TaskForm, now: Optional[datetime] = None) -> Dict[str, str]:
    """Return field name -> error message; empty when the form can be submitted."""
    if now is None:
        now = datetime.now(timezone.utc)

    errors: Dict[str, str] = {}
    if not form.title.strip():
        errors["title"] = "Title is required"

    if form.due_date is None:
        errors["due_date"] = "Due date is required"
    elif as_utc(form.due_date) < now:
        errors["due_date"] = "Due date cannot be in the past"

    return errors
