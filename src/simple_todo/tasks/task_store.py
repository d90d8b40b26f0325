# src/simple_todo/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from ..errors import ValidationError
from .task_models import Task, TaskIdGenerator

logger = logging.getLogger(__name__)

TaskSnapshot = tuple[Task, ...]
SnapshotListener = Callable[[TaskSnapshot], None]

DEFAULT_DATE_FORMAT = "%m/%d/%Y"
DEFAULT_TIME_FORMAT = "%I:%M:%S %p"


class TaskStore:
    """
    In-memory task collection, newest first.

    Every mutation builds a new tuple and swaps it in with a single
    assignment, so readers only ever see complete snapshots.

    Listeners are called after each mutation that actually changed the
    collection (never on no-ops). The store itself does no I/O and no
    confirmation; callers gate destructive operations.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        clock: Callable[[], datetime] | None = None,
        id_generator: TaskIdGenerator | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
        time_format: str = DEFAULT_TIME_FORMAT,
    ) -> None:
        self._tasks: TaskSnapshot = tuple(tasks)
        self._clock = clock or datetime.now
        self._ids = id_generator or TaskIdGenerator()
        self._date_format = date_format
        self._time_format = time_format
        self._listeners: list[SnapshotListener] = []

    # ---- read side ----

    @property
    def tasks(self) -> TaskSnapshot:
        return self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def completed_tasks(self) -> TaskSnapshot:
        return tuple(t for t in self._tasks if t.completed)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a post-mutation listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ---- low-level helpers ----

    def _commit(self, tasks: TaskSnapshot, reason: str) -> None:
        self._tasks = tasks
        logger.debug("TaskStore %s -> %d task(s)", reason, len(tasks))
        for listener in list(self._listeners):
            try:
                listener(tasks)
            except Exception:
                logger.exception("TaskStore listener failed after %s", reason)

    # ---- public API ----

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Seed the collection (startup restore). Does not notify listeners."""
        self._tasks = tuple(tasks)
        logger.info("TaskStore seeded with %d task(s)", len(self._tasks))

    def add(self, raw_text: str) -> Task:
        text = (raw_text or "").strip()
        if not text:
            raise ValidationError("Please enter a task")

        now = self._clock()
        task = Task(
            id=self._ids.next_id(t.id for t in self._tasks),
            text=text,
            completed=False,
            created_at=now.strftime(self._time_format),
            created_date=now.strftime(self._date_format),
        )
        self._commit((task, *self._tasks), "add")
        return task

    def toggle(self, task_id: str) -> bool:
        if self.get(task_id) is None:
            return False
        self._commit(
            tuple(t.toggled() if t.id == task_id else t for t in self._tasks),
            "toggle",
        )
        return True

    def delete(self, task_id: str) -> bool:
        if self.get(task_id) is None:
            return False
        self._commit(tuple(t for t in self._tasks if t.id != task_id), "delete")
        return True

    def delete_many(self, task_ids: Iterable[str]) -> int:
        """Remove exactly the given ids; unknown ids are ignored."""
        doomed = set(task_ids)
        remaining = tuple(t for t in self._tasks if t.id not in doomed)
        removed = len(self._tasks) - len(remaining)
        if removed == 0:
            return 0
        self._commit(remaining, "delete_many")
        return removed

    def delete_all(self) -> int:
        n = len(self._tasks)
        if n == 0:
            return 0
        self._commit((), "delete_all")
        return n

    def toggle_all_completion(self) -> bool:
        if not self._tasks:
            return False
        target = not all(t.completed for t in self._tasks)
        self._commit(
            tuple(t.with_completed(target) for t in self._tasks),
            "toggle_all_completion",
        )
        return True

    def clear_completed(self) -> int:
        remaining = tuple(t for t in self._tasks if not t.completed)
        removed = len(self._tasks) - len(remaining)
        if removed == 0:
            return 0
        self._commit(remaining, "clear_completed")
        return removed
