# src/simple_todo/tasks/task_views.py

"""
Derived values over a task snapshot.

Everything here is a pure function of the snapshot passed in. Nothing is
cached, so counts and groups can never drift from the collection.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .task_models import Task

TODAY_LABEL = "Today"
YESTERDAY_LABEL = "Yesterday"


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed: int
    pending: int
    progress_percent: int


@dataclass(frozen=True, slots=True)
class DateGroup:
    label: str
    date_text: str
    tasks: tuple[Task, ...]


def completed_count(tasks: Sequence[Task]) -> int:
    return sum(1 for t in tasks if t.completed)


def pending_count(tasks: Sequence[Task]) -> int:
    return sum(1 for t in tasks if not t.completed)


def progress_percent(tasks: Sequence[Task]) -> int:
    """Completed share in percent, rounded half-up; 0 for an empty list."""
    total = len(tasks)
    if total == 0:
        return 0
    done = completed_count(tasks)
    # floor(done * 100 / total + 0.5) in integer arithmetic
    return (done * 200 + total) // (2 * total)


def compute_stats(tasks: Sequence[Task]) -> TaskStats:
    done = completed_count(tasks)
    return TaskStats(
        total=len(tasks),
        completed=done,
        pending=len(tasks) - done,
        progress_percent=progress_percent(tasks),
    )


def _parse_date(text: str, date_format: str) -> date | None:
    try:
        return datetime.strptime(text, date_format).date()
    except (TypeError, ValueError):
        return None


def group_by_date(
    tasks: Sequence[Task],
    *,
    today: date,
    date_format: str,
) -> list[DateGroup]:
    """
    Bucket tasks by created_date.

    Order: Today, Yesterday, then older dates newest first. Date strings that
    do not parse with date_format come last, in first-seen order. Within a
    group tasks keep their collection order.
    """
    buckets: dict[str, list[Task]] = {}
    for t in tasks:
        buckets.setdefault(t.created_date, []).append(t)

    today_text = today.strftime(date_format)
    yesterday_text = (today - timedelta(days=1)).strftime(date_format)

    head: list[DateGroup] = []
    for date_text, label in ((today_text, TODAY_LABEL), (yesterday_text, YESTERDAY_LABEL)):
        items = buckets.pop(date_text, None)
        if items:
            head.append(DateGroup(label=label, date_text=date_text, tasks=tuple(items)))

    dated: list[tuple[date, str]] = []
    undated: list[str] = []
    for date_text in buckets:
        parsed = _parse_date(date_text, date_format)
        if parsed is None:
            undated.append(date_text)
        else:
            dated.append((parsed, date_text))
    dated.sort(key=lambda pair: pair[0], reverse=True)

    rest = [d for _, d in dated] + undated
    return head + [DateGroup(label=d, date_text=d, tasks=tuple(buckets[d])) for d in rest]
