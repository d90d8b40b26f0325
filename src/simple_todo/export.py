# src/simple_todo/export.py

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from .tasks.task_models import Task
from .tasks.task_views import compute_stats

logger = logging.getLogger(__name__)


def build_export_snapshot(tasks: Sequence[Task], *, now: datetime) -> dict[str, Any]:
    """Read-only export payload: timestamp, counts and every task record."""
    stats = compute_stats(tasks)
    return {
        "exportDate": now.isoformat(timespec="seconds"),
        "totalTasks": stats.total,
        "completedTasks": stats.completed,
        "pendingTasks": stats.pending,
        "tasks": [t.to_record() for t in tasks],
    }


class JsonFileExportSink:
    """Writes each snapshot to <export_dir>/todo-export-<timestamp>.json."""

    def __init__(self, export_dir: str | Path) -> None:
        self._export_dir = Path(export_dir)

    def _target(self, snapshot: dict[str, Any]) -> Path:
        stamp = str(snapshot.get("exportDate") or datetime.now().isoformat(timespec="seconds"))
        safe = stamp.replace(":", "").replace("-", "").replace("T", "-")[:15]
        path = self._export_dir / f"todo-export-{safe}.json"
        n = 1
        while path.exists():
            n += 1
            path = self._export_dir / f"todo-export-{safe}-{n}.json"
        return path

    def _write(self, snapshot: dict[str, Any]) -> Path:
        self._export_dir.mkdir(parents=True, exist_ok=True)
        path = self._target(snapshot)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(Exception):
            os.chmod(path, 0o600)
        return path

    async def deliver(self, snapshot: dict[str, Any]) -> Path:
        path = await asyncio.to_thread(self._write, snapshot)
        logger.info("Exported %s task(s) to %s", snapshot.get("totalTasks"), path)
        return path
