"""
TASKTRACK Dashboard - Filter Tests
"""

from datetime import datetime, timedelta, timezone

import pytest

from tasktrack.tasks.enums import TaskPriority, TaskStatus
from tasktrack.tasks.schemas import TaskResponse
from tasktrack.dashboard.filters import (
    DueState,
    PriorityFilter,
    StatusFilter,
    apply_filters,
    build_predicates,
    due_state,
    is_overdue,
)


def make_task(task_id, due_date, status=TaskStatus.PENDING, priority=TaskPriority.LOW,
              title="Task", description=""):
    return TaskResponse(
        id=task_id,
        user_id="user-1",
        title=title,
        description=description,
        due_date=due_date,
        priority=priority,
        status=status,
        recurring=False,
        created_at=datetime(2025, 1, 1),
    )


@pytest.fixture
def scenario_tasks(frozen_now):
    yesterday = frozen_now - timedelta(days=1)
    tomorrow = frozen_now + timedelta(days=1)
    return [
        make_task("late", yesterday),
        make_task("upcoming", tomorrow),
        make_task("done", yesterday, status=TaskStatus.COMPLETED),
    ]


def ids(tasks):
    return [t.id for t in tasks]


class TestStatusFilter:
    def test_overdue_is_pending_and_past_due(self, scenario_tasks, frozen_now):
        predicates = build_predicates("", StatusFilter.OVERDUE, PriorityFilter.ALL, frozen_now)
        assert ids(apply_filters(scenario_tasks, predicates)) == ["late"]

    def test_completed(self, scenario_tasks, frozen_now):
        predicates = build_predicates("", StatusFilter.COMPLETED, PriorityFilter.ALL, frozen_now)
        assert ids(apply_filters(scenario_tasks, predicates)) == ["done"]

    def test_pending_includes_overdue(self, scenario_tasks, frozen_now):
        predicates = build_predicates("", StatusFilter.PENDING, PriorityFilter.ALL, frozen_now)
        assert ids(apply_filters(scenario_tasks, predicates)) == ["late", "upcoming"]

    def test_all_keeps_everything_in_order(self, scenario_tasks, frozen_now):
        assert build_predicates("", StatusFilter.ALL, PriorityFilter.ALL, frozen_now) == []
        assert ids(apply_filters(scenario_tasks, [])) == ["late", "upcoming", "done"]

    def test_due_exactly_now_is_not_overdue(self, frozen_now):
        assert not is_overdue(make_task("edge", frozen_now), frozen_now)

    def test_naive_due_date_is_treated_as_utc(self, frozen_now):
        naive = (frozen_now - timedelta(minutes=1)).replace(tzinfo=None)
        assert is_overdue(make_task("naive", naive), frozen_now)


class TestSearchAndPriority:
    def test_search_matches_title_or_description_ignoring_case(self, frozen_now):
        tasks = [
            make_task("a", frozen_now, title="Pay BILLS"),
            make_task("b", frozen_now, title="Groceries", description="milk and bills"),
            make_task("c", frozen_now, title="Gym"),
        ]
        predicates = build_predicates("bills", StatusFilter.ALL, PriorityFilter.ALL, frozen_now)
        assert ids(apply_filters(tasks, predicates)) == ["a", "b"]

    def test_priority_exact_match(self, frozen_now):
        tasks = [
            make_task("low", frozen_now),
            make_task("high", frozen_now, priority=TaskPriority.HIGH),
        ]
        predicates = build_predicates("", StatusFilter.ALL, PriorityFilter.HIGH, frozen_now)
        assert ids(apply_filters(tasks, predicates)) == ["high"]

    def test_filters_compose_with_and(self, frozen_now):
        past = frozen_now - timedelta(hours=2)
        tasks = [
            make_task("match", past, priority=TaskPriority.HIGH, title="Report"),
            make_task("wrong-priority", past, title="Report"),
            make_task("wrong-title", past, priority=TaskPriority.HIGH, title="Other"),
            make_task("not-overdue", frozen_now + timedelta(hours=2), priority=TaskPriority.HIGH, title="Report"),
        ]
        predicates = build_predicates("report", StatusFilter.OVERDUE, PriorityFilter.HIGH, frozen_now)
        assert len(predicates) == 3
        assert ids(apply_filters(tasks, predicates)) == ["match"]


class TestDueState:
    def test_states(self, frozen_now):
        assert due_state(make_task("a", frozen_now - timedelta(hours=1)), frozen_now) == DueState.OVERDUE
        assert due_state(make_task("b", frozen_now + timedelta(hours=1)), frozen_now) == DueState.DUE_TODAY
        assert due_state(make_task("c", frozen_now + timedelta(days=3)), frozen_now) == DueState.UPCOMING
        done = make_task("d", frozen_now - timedelta(days=1), status=TaskStatus.COMPLETED)
        assert due_state(done, frozen_now) == DueState.COMPLETED

    def test_today_is_judged_in_the_timezone_of_now(self):
        eastern = timezone(timedelta(hours=-5))
        morning = datetime(2025, 1, 15, 10, 0, tzinfo=eastern)
        # 23:30 local on Jan 15 is Jan 16 in UTC
        late_evening = datetime(2025, 1, 16, 4, 30, tzinfo=timezone.utc)
        task = make_task("a", late_evening)
        assert due_state(task, morning) == DueState.DUE_TODAY
        assert due_state(task, morning.astimezone(timezone.utc)) == DueState.UPCOMING
