"""
TASKTRACK Dashboard - Task Store

Keeps the authoritative task list fetched from the server and the
filtered view derived from it. Mutations are reconciled locally from
the server's response:

- add: append the returned task
- update / complete: replace the task with the same id
- delete: remove the task by id

When a mutation fails, the error message is recorded and the list is
refetched so local state cannot drift from the server.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from tasktrack.tasks.schemas import TaskResponse
from tasktrack.dashboard.client import ApiError, TaskTrackClient
from tasktrack.dashboard.filters import (
    DueState,
    PriorityFilter,
    StatusFilter,
    apply_filters,
    build_predicates,
    due_state,
)
from tasktrack.dashboard.forms import TaskForm, validate_task_form

logger = logging.getLogger(__name__)


class DashboardStore:
    def __init__(
        self,
        client: TaskTrackClient,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.client = client
        # Local time, so "due today" follows the viewer's calendar day
        self._clock = clock or (lambda: datetime.now().astimezone())
        self.tasks: List[TaskResponse] = []
        self.filtered: List[TaskResponse] = []
        self.loading = False
        self.error: Optional[str] = None
        self._search_term = ""
        self._status_filter = StatusFilter.ALL
        self._priority_filter = PriorityFilter.ALL

    # ---------- filters ----------
    @property
    def search_term(self) -> str:
        return self._search_term

    @search_term.setter
    def search_term(self, value: str) -> None:
        self._search_term = value
        self.refilter()

    @property
    def status_filter(self) -> StatusFilter:
        return self._status_filter

    @status_filter.setter
    def status_filter(self, value: StatusFilter) -> None:
        self._status_filter = StatusFilter(value)
        self.refilter()

    @property
    def priority_filter(self) -> PriorityFilter:
        return self._priority_filter

    @priority_filter.setter
    def priority_filter(self, value: PriorityFilter) -> None:
        self._priority_filter = PriorityFilter(value)
        self.refilter()

    @property
    def has_active_filters(self) -> bool:
        return (
            bool(self._search_term)
            or self._status_filter != StatusFilter.ALL
            or self._priority_filter != PriorityFilter.ALL
        )

    def clear_filters(self) -> None:
        self._search_term = ""
        self._status_filter = StatusFilter.ALL
        self._priority_filter = PriorityFilter.ALL
        self.refilter()

    def refilter(self) -> None:
        """Recompute the filtered view. Overdue is judged against the current time."""
        predicates = build_predicates(
            self._search_term,
            self._status_filter,
            self._priority_filter,
            self._clock(),
        )
        self.filtered = apply_filters(self.tasks, predicates)

    def due_state(self, task: TaskResponse) -> DueState:
        return due_state(task, self._clock())

    def dismiss_error(self) -> None:
        self.error = None

    # ---------- reconciliation ----------
    def _set_tasks(self, tasks: List[TaskResponse]) -> None:
        self.tasks = list(tasks)
        self.refilter()

    def _append(self, task: TaskResponse) -> None:
        self._set_tasks([*self.tasks, task])

    def _replace_by_id(self, task: TaskResponse) -> None:
        self._set_tasks([task if t.id == task.id else t for t in self.tasks])

    def _remove_by_id(self, task_id: str) -> None:
        self._set_tasks([t for t in self.tasks if t.id != task_id])

    async def _fail(self, error: ApiError, fallback: str) -> None:
        self.error = error.message or fallback
        logger.warning(f"{fallback}: {error}")
        await self._reload()

    async def _reload(self) -> None:
        """Refetch after a failed mutation. Keeps the mutation's error message."""
        try:
            self._set_tasks(await self.client.list_tasks())
        except ApiError as e:
            logger.warning(f"Refetch after failure also failed: {e}")

    def _check_form(self, form: TaskForm) -> bool:
        errors = validate_task_form(form, self._clock())
        if errors:
            self.error = next(iter(errors.values()))
            return False
        return True

    # ---------- server operations ----------
    async def fetch_tasks(self) -> None:
        self.loading = True
        try:
            self._set_tasks(await self.client.list_tasks())
            self.error = None
        except ApiError as e:
            self.error = e.message or "Failed to fetch tasks"
            logger.warning(f"Error fetching tasks: {e}")
        finally:
            self.loading = False

    async def add_task(self, form: TaskForm) -> Optional[TaskResponse]:
        if not self._check_form(form):
            return None
        try:
            task = await self.client.create_task(form)
        except ApiError as e:
            await self._fail(e, "Failed to add task")
            return None
        self._append(task)
        return task

    async def update_task(self, task_id: str, form: TaskForm) -> Optional[TaskResponse]:
        if not self._check_form(form):
            return None
        try:
            task = await self.client.update_task(task_id, form)
        except ApiError as e:
            await self._fail(e, "Failed to update task")
            return None
        self._replace_by_id(task)
        return task

    async def complete_task(self, task_id: str) -> Optional[TaskResponse]:
        try:
            task = await self.client.complete_task(task_id)
        except ApiError as e:
            await self._fail(e, "Failed to complete task")
            return None
        self._replace_by_id(task)
        return task

    async def delete_task(self, task_id: str) -> bool:
        try:
            await self.client.delete_task(task_id)
        except ApiError as e:
            await self._fail(e, "Failed to delete task")
            return False
        self._remove_by_id(task_id)
        return True

    async def reorder(self, source_index: int, destination_index: Optional[int]) -> None:
        """Move a task within the filtered view. The new order is not persisted."""
        if destination_index is None:
            return
        # The view may have shrunk between drag start and drop
        if source_index not in range(len(self.filtered)):
            return
        items = list(self.filtered)
        moved = items.pop(source_index)
        items.insert(destination_index, moved)
        self.filtered = items

        try:
            await self.client.reorder(moved.id, destination_index)
        except ApiError as e:
            self.error = e.message or "Failed to reorder tasks"
            logger.warning(f"Error reordering tasks: {e}")
            # Revert to the derived order
            self.refilter()
