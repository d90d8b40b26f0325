# tests/test_task_views.py

from __future__ import annotations

from datetime import date

import pytest

from simple_todo.tasks.task_models import Task
from simple_todo.tasks.task_views import (
    TODAY_LABEL,
    YESTERDAY_LABEL,
    compute_stats,
    group_by_date,
    progress_percent,
)

FMT = "%m/%d/%Y"


def _task(tid: str, created_date: str, completed: bool = False) -> Task:
    return Task(
        id=tid,
        text=f"task {tid}",
        completed=completed,
        created_at="10:00:00 AM",
        created_date=created_date,
    )


def test_progress_empty_is_zero() -> None:
    assert progress_percent([]) == 0
    stats = compute_stats([])
    assert (stats.total, stats.completed, stats.pending, stats.progress_percent) == (0, 0, 0, 0)


@pytest.mark.parametrize("n", [1, 2, 3, 7])
def test_progress_all_done_is_100(n: int) -> None:
    tasks = [_task(str(i), "10/19/2026", completed=True) for i in range(n)]
    assert progress_percent(tasks) == 100


@pytest.mark.parametrize(
    ("done", "total", "expected"),
    [(1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 2, 50), (0, 4, 0)],
)
def test_progress_rounds_half_up(done: int, total: int, expected: int) -> None:
    tasks = [_task(str(i), "10/19/2026", completed=i < done) for i in range(total)]
    assert progress_percent(tasks) == expected


def test_stats_counts() -> None:
    tasks = [
        _task("1", "10/19/2026", completed=True),
        _task("2", "10/19/2026"),
        _task("3", "10/19/2026"),
    ]
    stats = compute_stats(tasks)
    assert stats.total == 3
    assert stats.completed == 1
    assert stats.pending == 2
    assert stats.progress_percent == 33


def test_group_labels_and_order() -> None:
    tasks = [
        _task("t1", "10/19/2026"),
        _task("y1", "10/18/2026"),
        _task("t2", "10/19/2026"),
        _task("o1", "10/01/2026"),
    ]
    groups = group_by_date(tasks, today=date(2026, 10, 19), date_format=FMT)

    assert [g.label for g in groups] == [TODAY_LABEL, YESTERDAY_LABEL, "10/01/2026"]
    assert [t.id for t in groups[0].tasks] == ["t1", "t2"]
    assert groups[0].date_text == "10/19/2026"


def test_older_groups_descend_chronologically() -> None:
    # collection order deliberately not chronological
    tasks = [
        _task("a", "01/05/2025"),
        _task("b", "09/30/2026"),
        _task("c", "12/31/2025"),
    ]
    groups = group_by_date(tasks, today=date(2026, 10, 19), date_format=FMT)
    assert [g.label for g in groups] == ["09/30/2026", "12/31/2025", "01/05/2025"]


def test_groups_without_today() -> None:
    tasks = [_task("y", "10/18/2026"), _task("o", "10/10/2026")]
    groups = group_by_date(tasks, today=date(2026, 10, 19), date_format=FMT)
    assert [g.label for g in groups] == [YESTERDAY_LABEL, "10/10/2026"]


def test_unparseable_dates_go_last_in_first_seen_order() -> None:
    tasks = [
        _task("x", "someday"),
        _task("o", "10/10/2026"),
        _task("z", "later"),
    ]
    groups = group_by_date(tasks, today=date(2026, 10, 19), date_format=FMT)
    assert [g.label for g in groups] == ["10/10/2026", "someday", "later"]


def test_group_empty() -> None:
    assert group_by_date([], today=date(2026, 10, 19), date_format=FMT) == []
