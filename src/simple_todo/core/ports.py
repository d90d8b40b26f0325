# src/simple_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage/prompts/notices swappable and makes testing easier.
"""

from enum import StrEnum
from pathlib import Path
from typing import Any, Protocol, Sequence


class ConfirmOption(StrEnum):
    AFFIRM = "affirm"
    DESTRUCTIVE_AFFIRM = "destructive_affirm"
    CANCEL = "cancel"

    @property
    def is_affirmative(self) -> bool:
        return self in (ConfirmOption.AFFIRM, ConfirmOption.DESTRUCTIVE_AFFIRM)


class NoticeLevel(StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class StorageProvider(Protocol):
    """
    Opaque text blob storage addressed by key.

    get_item returns None when nothing is stored under the key.
    set_item replaces any previous value in full.
    """

    async def get_item(self, key: str) -> str | None: ...
    async def set_item(self, key: str, value: str) -> None: ...


class ConfirmationProvider(Protocol):
    """Presents a prompt and returns the option the user picked."""

    async def confirm(
            self,
            title: str,
            message: str,
            options: Sequence[ConfirmOption],
    ) -> ConfirmOption: ...


class Notifier(Protocol):
    """Transient user-visible notices (validation, storage failures, 'nothing to do')."""

    def notify(self, level: NoticeLevel, message: str) -> None: ...


class ExportSink(Protocol):
    """Receives an export snapshot; returns where it went (path, URL, ...) if meaningful."""

    async def deliver(self, snapshot: dict[str, Any]) -> Path | str | None: ...
