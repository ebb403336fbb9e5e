"""Task organization - filtering, ranking, board buckets and reschedules.

Everything here is a pure function of its arguments. Views are recomputed
from the collection on demand; nothing derived is stored on a task.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import date, datetime

from quickdo_cli.models import (
    PRIORITY_ORDER,
    PRIORITY_RANK,
    BucketKey,
    Task,
    TaskFilters,
)
from quickdo_cli.utils.timeutils import (
    add_days,
    at_time,
    end_of_day,
    from_epoch_ms,
    start_of_day,
    to_epoch_ms,
)

# Reschedule anchors for board moves.
TODAY_DUE_HOUR = 17
WEEK_DUE_HOUR = 9
WEEK_DUE_OFFSET_DAYS = 3
WEEK_HORIZON_DAYS = 7

# Size of the focus shortlist
FOCUS_LIMIT = 5

BOARD_ORDER: list[BucketKey] = [
    BucketKey.TODAY,
    BucketKey.WEEK,
    BucketKey.LATER,
    BucketKey.DONE,
]


def _due_key(task: Task) -> float:
    return task.due if task.due is not None else math.inf


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def _haystack(task: Task) -> str:
    return f"{task.title} {task.notes} {' '.join(task.tags)}".lower()


def matches_filters(task: Task, filters: TaskFilters) -> bool:
    """Return True when *task* passes every active filter."""
    if not filters.show_done and task.done:
        return False
    if filters.tag and filters.tag not in task.tags:
        return False
    if filters.project and task.project != filters.project:
        return False
    if filters.search and filters.search.lower() not in _haystack(task):
        return False
    return True


def filter_tasks(tasks: Iterable[Task], filters: TaskFilters | None = None) -> list[Task]:
    """Apply completion, tag, project and search filters (logical AND)."""
    filters = filters or TaskFilters()
    return [task for task in tasks if matches_filters(task, filters)]


def filter_summary(filters: TaskFilters) -> str:
    """Human label for the tag/project filters, e.g. ``#work · Project: site``."""
    parts = []
    if filters.tag:
        parts.append(f"#{filters.tag}")
    if filters.project:
        parts.append(f"Project: {filters.project}")
    return " · ".join(parts)


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


def rank_key(task: Task) -> tuple[bool, int, float, int]:
    """Sort key for the list view.

    Open before done, then priority (high first), due ascending with no due
    last, then creation time.
    """
    return (task.done, PRIORITY_RANK[task.priority], _due_key(task), task.created_at)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=rank_key)


def focus_tasks(tasks: Iterable[Task], limit: int = FOCUS_LIMIT) -> list[Task]:
    """The few open tasks to work on next: priority first, then nearest due.

    Ignores list filters. Ties keep collection order.
    """
    open_tasks = [task for task in tasks if not task.done]
    ranked = sorted(open_tasks, key=_urgency_key)
    return ranked[: max(limit, 0)]


# ---------------------------------------------------------------------------
# Board buckets
# ---------------------------------------------------------------------------


def board_bounds(now: datetime) -> tuple[int, int, int]:
    """Return ``(today_start, today_end, week_end)`` in epoch ms."""
    today_start = to_epoch_ms(start_of_day(now))
    today_end = to_epoch_ms(end_of_day(now))
    week_end = to_epoch_ms(end_of_day(add_days(now, WEEK_HORIZON_DAYS)))
    return today_start, today_end, week_end


def _bucket_with_bounds(task: Task, bounds: tuple[int, int, int]) -> BucketKey:
    today_start, today_end, week_end = bounds
    if task.done:
        return BucketKey.DONE
    if task.due is not None and today_start <= task.due <= today_end:
        return BucketKey.TODAY
    if task.due is not None and today_end < task.due <= week_end:
        return BucketKey.WEEK
    return BucketKey.LATER


def bucket_for(task: Task, now: datetime) -> BucketKey:
    """Board column of a single task.

    Overdue open tasks (due before today) land in ``later`` together with
    undated ones.
    """
    return _bucket_with_bounds(task, board_bounds(now))


def _urgency_key(task: Task) -> tuple[int, float]:
    return (PRIORITY_RANK[task.priority], _due_key(task))


def bucket_tasks(tasks: Iterable[Task], now: datetime) -> dict[BucketKey, list[Task]]:
    """Group tasks into board columns, each sorted for display."""
    bounds = board_bounds(now)
    buckets: dict[BucketKey, list[Task]] = {key: [] for key in BOARD_ORDER}
    for task in tasks:
        buckets[_bucket_with_bounds(task, bounds)].append(task)

    for key in (BucketKey.TODAY, BucketKey.WEEK, BucketKey.LATER):
        buckets[key].sort(key=_urgency_key)
    buckets[BucketKey.DONE].sort(key=_due_key)
    return buckets


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def move_to_bucket(task: Task, bucket: BucketKey | str, now: datetime) -> Task:
    """Reschedule *task* so that it belongs to *bucket*.

    done  -> marked done, due untouched
    later -> due cleared, reopened
    today -> due today at 17:00, reopened
    week  -> due in three days at 09:00, reopened
    """
    bucket = BucketKey(bucket)
    if bucket is BucketKey.DONE:
        return task.replace(done=True)
    if bucket is BucketKey.LATER:
        return task.replace(due=None, done=False)
    if bucket is BucketKey.TODAY:
        due = at_time(now, TODAY_DUE_HOUR)
    else:
        due = at_time(add_days(now, WEEK_DUE_OFFSET_DAYS), WEEK_DUE_HOUR)
    return task.replace(due=to_epoch_ms(due), done=False)


def bump_priority(task: Task, direction: int) -> Task:
    """Move priority one step up (+1) or down (-1), clamped at both ends."""
    step = 1 if direction > 0 else -1 if direction < 0 else 0
    index = PRIORITY_ORDER.index(task.priority) + step
    index = max(0, min(len(PRIORITY_ORDER) - 1, index))
    return task.replace(priority=PRIORITY_ORDER[index])


def toggle_done(task: Task) -> Task:
    return task.replace(done=not task.done)


def toggle_subtask(task: Task, subtask_id: str) -> Task:
    """Flip one subtask; unknown ids leave the task unchanged."""
    subtasks = [
        sub.model_copy(update={"done": not sub.done}) if sub.id == subtask_id else sub
        for sub in task.subtasks
    ]
    return task.replace(subtasks=subtasks)


# ---------------------------------------------------------------------------
# Derived listings
# ---------------------------------------------------------------------------


def all_tags(tasks: Iterable[Task]) -> list[str]:
    return sorted({tag for task in tasks for tag in task.tags})


def all_projects(tasks: Iterable[Task]) -> list[str]:
    return sorted({task.project for task in tasks if task.project})


def tasks_due_on(tasks: Sequence[Task], day: date) -> list[Task]:
    """Open tasks whose due instant falls on calendar *day*."""
    return [
        task
        for task in tasks
        if not task.done and task.due is not None and from_epoch_ms(task.due).date() == day
    ]
