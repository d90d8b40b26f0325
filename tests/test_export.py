# tests/test_export.py

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from simple_todo.export import JsonFileExportSink, build_export_snapshot
from simple_todo.tasks.task_models import Task


def _tasks() -> list[Task]:
    return [
        Task(id="2", text="B", completed=True, created_at="t", created_date="d"),
        Task(id="1", text="A", completed=False, created_at="t", created_date="d"),
    ]


def test_build_export_snapshot() -> None:
    snap = build_export_snapshot(_tasks(), now=datetime(2026, 10, 19, 9, 30, 5))
    assert snap["exportDate"] == "2026-10-19T09:30:05"
    assert (snap["totalTasks"], snap["completedTasks"], snap["pendingTasks"]) == (2, 1, 1)
    assert [r["id"] for r in snap["tasks"]] == ["2", "1"]


@pytest.mark.asyncio
async def test_json_file_export_sink_writes_unique_files(tmp_path: Path) -> None:
    sink = JsonFileExportSink(tmp_path / "exports")
    snap = build_export_snapshot(_tasks(), now=datetime(2026, 10, 19, 9, 30, 5))

    first = await sink.deliver(snap)
    second = await sink.deliver(snap)

    assert first.name == "todo-export-20261019-093005.json"
    assert second.name == "todo-export-20261019-093005-2.json"
    assert json.loads(first.read_text("utf-8")) == snap
