"""
TASKTRACK Dashboard - Task Filters

Filters are plain predicates over a task. The active search term,
status filter and priority filter each contribute at most one predicate,
and a task is shown only when every predicate accepts it.
"""

from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, List, Optional

from tasktrack.tasks.enums import TaskPriority, TaskStatus
from tasktrack.tasks.models import as_utc
from tasktrack.tasks.schemas import TaskResponse

Predicate = Callable[[TaskResponse], bool]


class StatusFilter(str, Enum):
    ALL = "All"
    PENDING = "Pending"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class PriorityFilter(str, Enum):
    ALL = "All"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class DueState(str, Enum):
    """Display state of a task relative to its due date."""
    COMPLETED = "completed"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    UPCOMING = "upcoming"


def is_overdue(task: TaskResponse, now: datetime) -> bool:
    """Pending and due strictly before now."""
    return task.status == TaskStatus.PENDING and as_utc(task.due_date) < now


def due_state(task: TaskResponse, now: datetime) -> DueState:
    """Due today means the same calendar day as now, in now's timezone."""
    if task.status == TaskStatus.COMPLETED:
        return DueState.COMPLETED
    if is_overdue(task, now):
        return DueState.OVERDUE
    due = as_utc(task.due_date).astimezone(now.tzinfo)
    if due.date() == now.date():
        return DueState.DUE_TODAY
    return DueState.UPCOMING


def search_predicate(term: str) -> Optional[Predicate]:
    if not term:
        return None
    needle = term.lower()

    def matches(task: TaskResponse) -> bool:
        return needle in task.title.lower() or needle in task.description.lower()

    return matches


def status_predicate(status_filter: StatusFilter, now: datetime) -> Optional[Predicate]:
    if status_filter == StatusFilter.ALL:
        return None
    if status_filter == StatusFilter.OVERDUE:
        return lambda task: is_overdue(task, now)
    wanted = TaskStatus(status_filter.value)
    return lambda task: task.status == wanted


def priority_predicate(priority_filter: PriorityFilter) -> Optional[Predicate]:
    if priority_filter == PriorityFilter.ALL:
        return None
    wanted = TaskPriority(priority_filter.value)
    return lambda task: task.priority == wanted


def build_predicates(
    search_term: str,
    status_filter: StatusFilter,
    priority_filter: PriorityFilter,
    now: datetime,
) -> List[Predicate]:
    """Predicates for the active filters; inactive filters contribute nothing."""
    candidates = (
        search_predicate(search_term),
        status_predicate(status_filter, now),
        priority_predicate(priority_filter),
    )
    return [p for p in candidates if p is not None]


def apply_filters(tasks: Iterable[TaskResponse], predicates: List[Predicate]) -> List[TaskResponse]:
    """Keep tasks accepted by every predicate, preserving order."""
    filtered = list(tasks)
    for predicate in predicates:
        filtered = [task for task in filtered if predicate(task)]
    return filtered
