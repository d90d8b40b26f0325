# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from simple_todo.core.controller import TodoController
from simple_todo.storage.bridge import PersistenceBridge
from simple_todo.tasks.task_models import TaskIdGenerator
from simple_todo.tasks.task_store import TaskStore

from .fakes import FakeClock, FlakyStorage, RecordingNotifier, ScriptedConfirmer

DATE_FORMAT = "%m/%d/%Y"
TIME_FORMAT = "%I:%M:%S %p"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the controller.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Simple Todo App",
        log_level="INFO",
        data_dir=tmp_path / "data",
        storage_dir=tmp_path / "data" / "storage",
        export_dir=tmp_path / "data" / "exports",
        storage_key="tasks",
        date_format=DATE_FORMAT,
        time_format=TIME_FORMAT,
        confirm_destructive=True,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 9, 30, 0))


@pytest.fixture()
def store(clock: FakeClock) -> TaskStore:
    ticks = iter(range(1_000, 1_000_000))
    return TaskStore(
        clock=clock,
        id_generator=TaskIdGenerator(lambda: next(ticks)),
        date_format=DATE_FORMAT,
        time_format=TIME_FORMAT,
    )


@pytest.fixture()
def storage() -> FlakyStorage:
    return FlakyStorage()


@pytest.fixture()
def confirmer() -> ScriptedConfirmer:
    return ScriptedConfirmer()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def make_controller(store, storage, confirmer, notifier, clock):
    """
    Controller factory wired with deterministic fakes.

    Each call builds a fresh bridge over the shared storage, which is how a
    process restart looks from the storage's point of view.
    """

    def _make(
        *, storage_override=None, store_override=None, confirmer_override=None, **kwargs
    ) -> TodoController:
        bridge = PersistenceBridge(
            storage if storage_override is None else storage_override,
            key="tasks",
            clock=clock,
            date_format=DATE_FORMAT,
            time_format=TIME_FORMAT,
        )
        return TodoController(
            store if store_override is None else store_override,
            bridge,
            confirmer if confirmer_override is None else confirmer_override,
            notifier,
            clock=clock,
            date_format=DATE_FORMAT,
            **kwargs,
        )

    return _make
