# src/simple_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures local (gitignored) directories exist,
- wires storage, bridge, store and console providers into one TodoController.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.controller import TodoController
from ..core.ports import ConfirmationProvider, Notifier, StorageProvider
from ..export import JsonFileExportSink
from ..storage.bridge import PersistenceBridge
from ..storage.providers import JsonFileStorage
from ..tasks.task_store import TaskStore
from .console_connector import ConsoleConfirmer, ConsoleNotifier

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_dir.mkdir(parents=True, exist_ok=True)


def create_controller(
    *,
    settings: Settings | None = None,
    storage: StorageProvider | None = None,
    confirmer: ConfirmationProvider | None = None,
    notifier: Notifier | None = None,
) -> TodoController:
    """
    Build a TodoController from settings.

    Collaborators are injectable for tests; defaults are the JSON file storage
    and the console prompt/notice providers. The controller is not started.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(date_format=settings.date_format, time_format=settings.time_format)
    bridge = PersistenceBridge(
        storage or JsonFileStorage(settings.storage_dir),
        key=settings.storage_key,
        date_format=settings.date_format,
        time_format=settings.time_format,
    )
    controller = TodoController(
        store,
        bridge,
        confirmer or ConsoleConfirmer(),
        notifier or ConsoleNotifier(),
        export_sink=JsonFileExportSink(settings.export_dir),
        date_format=settings.date_format,
        confirm_destructive=settings.confirm_destructive,
    )
    logger.debug("Controller wired (storage key=%s)", settings.storage_key)
    return controller
