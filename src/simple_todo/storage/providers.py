# src/simple_todo/storage/providers.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"[A-Za-z0-9_.@-]+")


def _check_key(key: str) -> str:
    if not key or not _KEY_RE.fullmatch(key) or key.startswith("."):
        raise ValueError(f"invalid storage key: {key!r}")
    return key


class JsonFileStorage:
    """
    One file per key under base_dir (<base_dir>/<key>.json).

    Writes go to a temp file first and are moved into place with os.replace,
    so a crash mid-write leaves the previous value intact. Blocking file I/O
    runs in a worker thread.
    """

    def __init__(self, base_dir: str | Path) -> None:
        self._base_dir = Path(base_dir)
        self._base_dir.mkdir(parents=True, exist_ok=True)
        logger.info("JsonFileStorage ready dir=%s", self._base_dir)

    def path_for(self, key: str) -> Path:
        return self._base_dir / f"{_check_key(key)}.json"

    def _read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text("utf-8")

    def _write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(Exception):
            # Best-effort: not critical on Windows or restricted FS.
            os.chmod(path, 0o600)

    async def get_item(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)
        logger.debug("Stored key=%s bytes=%d", key, len(value))


class MemoryStorage:
    """Dict-backed storage for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
