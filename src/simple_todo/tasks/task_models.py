# src/simple_todo/tasks/task_models.py

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Task:
    """
    One user-entered item.

    created_at / created_date are display strings captured once at creation
    (time of day and calendar date); created_date is also the grouping key.
    """

    id: str
    text: str
    completed: bool
    created_at: str
    created_date: str

    def toggled(self) -> Task:
        return replace(self, completed=not self.completed)

    def with_completed(self, completed: bool) -> Task:
        if self.completed == completed:
            return self
        return replace(self, completed=completed)

    def to_record(self) -> dict[str, Any]:
        """Persisted shape (camelCase field names, JSON-safe values)."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
            "createdDate": self.created_date,
        }

    @classmethod
    def from_record(
        cls,
        raw: Mapping[str, Any],
        *,
        fallback_date: str,
        fallback_time: str,
    ) -> Task:
        """
        Build a Task from a persisted record.

        Older blobs may lack createdDate/createdAt; those get the fallback
        values. Raises ValueError when the record has no usable id or text.
        """
        if not isinstance(raw, Mapping):
            raise ValueError(f"task record must be an object, got {type(raw).__name__}")

        raw_id = raw.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)):
            raise ValueError("task record has no id")
        task_id = str(raw_id).strip()
        if not task_id:
            raise ValueError("task record has an empty id")

        text = raw.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"task record {task_id} has no text")

        created_at = raw.get("createdAt")
        if not isinstance(created_at, str) or not created_at:
            created_at = fallback_time

        created_date = raw.get("createdDate")
        if not isinstance(created_date, str) or not created_date:
            created_date = fallback_date

        return cls(
            id=task_id,
            text=text.strip(),
            completed=raw.get("completed") is True,
            created_at=created_at,
            created_date=created_date,
        )


class TaskIdGenerator:
    """
    Time-derived ids with a collision guard.

    The candidate is the current time in milliseconds. If it is not greater
    than the last issued id, or already taken, it is bumped until unique, so
    two tasks created within the same clock tick still get distinct ids.
    """

    def __init__(self, time_ms: Callable[[], int] | None = None) -> None:
        self._time_ms = time_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def next_id(self, taken: Iterable[str] = ()) -> str:
        taken_set = set(taken)
        candidate = max(int(self._time_ms()), self._last + 1)
        while str(candidate) in taken_set:
            candidate += 1
        self._last = candidate
        return str(candidate)
