# src/simple_todo/storage/bridge.py

from __future__ import annotations

"""
Persistence bridge.

Keeps one stored blob (a JSON array of task records) in sync with the
in-memory TaskStore:
- load() once at startup,
- save() the whole collection after each mutation (no deltas),
- schedule_save() for fire-and-forget saves from synchronous mutation paths.

Scheduled writes go through a single writer task, so an older snapshot can
never land after a newer one. Snapshots queued while a write is in flight
are coalesced: only the latest one is written next.
"""

import asyncio
import json
import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime

from ..core.ports import StorageProvider
from ..errors import StorageReadError, StorageWriteError
from ..tasks.task_models import Task
from ..tasks.task_store import DEFAULT_DATE_FORMAT, DEFAULT_TIME_FORMAT

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"
BACKUP_SUFFIX = ".corrupt"

SaveErrorHandler = Callable[[StorageWriteError], None]


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_record() for t in tasks], ensure_ascii=False)


def decode_tasks(raw: str, *, fallback_date: str, fallback_time: str) -> list[Task]:
    """
    Parse a stored blob.

    The blob as a whole must be a JSON array, otherwise StorageReadError.
    Broken records inside it are skipped (logged), as are repeated ids.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise StorageReadError(f"stored tasks are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise StorageReadError(f"stored tasks must be a JSON array, got {type(data).__name__}")

    out: list[Task] = []
    seen: set[str] = set()
    for i, rec in enumerate(data):
        try:
            task = Task.from_record(rec, fallback_date=fallback_date, fallback_time=fallback_time)
        except ValueError as e:
            logger.warning("Skipping stored task #%d: %s", i, e)
            continue
        if task.id in seen:
            logger.warning("Skipping stored task #%d: duplicate id %s", i, task.id)
            continue
        seen.add(task.id)
        out.append(task)
    return out


class PersistenceBridge:
    def __init__(
        self,
        storage: StorageProvider,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
        time_format: str = DEFAULT_TIME_FORMAT,
        on_save_error: SaveErrorHandler | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock or datetime.now
        self._date_format = date_format
        self._time_format = time_format
        self.on_save_error = on_save_error

        self._loaded = False
        self._unreadable: str | None = None
        self._write_lock = asyncio.Lock()
        self._pending: tuple[Task, ...] | None = None
        self._writer: asyncio.Task[None] | None = None
        self.last_error: StorageWriteError | None = None

    @property
    def key(self) -> str:
        return self._key

    @property
    def loaded(self) -> bool:
        return self._loaded

    def mark_loaded(self) -> None:
        """Allow saves after a failed load (the session continues from an empty list)."""
        self._loaded = True

    @property
    def backup_key(self) -> str:
        return f"{self._key}{BACKUP_SUFFIX}"

    async def backup_unreadable(self) -> str | None:
        """
        Copy the stored blob that failed to load to `<key>.corrupt`.

        Call it before mark_loaded(): the first save after that replaces the
        blob under the main key. If the read itself failed, the blob is read
        once more. Returns the backup key, or None when there was nothing to
        copy or the copy failed.
        """
        raw = self._unreadable
        if raw is None:
            try:
                raw = await self._storage.get_item(self._key)
            except Exception as e:
                logger.warning("Stored tasks still unreadable, no backup made: %s", e)
                return None
        if raw is None:
            return None

        try:
            await self._storage.set_item(self.backup_key, raw)
        except Exception:
            logger.exception("Failed to back up unreadable tasks to key=%s", self.backup_key)
            return None

        self._unreadable = None
        logger.warning("Unreadable tasks copied to key=%s", self.backup_key)
        return self.backup_key

    # ---- load ----

    async def load(self) -> list[Task]:
        try:
            raw = await self._storage.get_item(self._key)
        except Exception as e:
            raise StorageReadError(f"failed to read stored tasks: {e}") from e

        if raw is None:
            logger.info("No stored tasks under key=%s; starting empty", self._key)
            self._loaded = True
            return []

        # Legacy records without timestamps get the load time.
        now = self._clock()
        try:
            tasks = decode_tasks(
                raw,
                fallback_date=now.strftime(self._date_format),
                fallback_time=now.strftime(self._time_format),
            )
        except StorageReadError:
            self._unreadable = raw
            raise
        self._loaded = True
        logger.info("Loaded %d task(s) from key=%s", len(tasks), self._key)
        return tasks

    # ---- save ----

    async def save(self, tasks: Sequence[Task]) -> None:
        if not self._loaded:
            raise RuntimeError("save() called before load() completed")

        payload = encode_tasks(tasks)
        async with self._write_lock:
            try:
                await self._storage.set_item(self._key, payload)
            except Exception as e:
                raise StorageWriteError(f"failed to store tasks: {e}") from e
        logger.debug("Saved %d task(s) to key=%s", len(tasks), self._key)

    def schedule_save(self, tasks: Sequence[Task]) -> None:
        """
        Queue a snapshot for writing and return immediately.

        Without a running event loop the snapshot stays queued until flush().
        """
        if not self._loaded:
            logger.warning("Save requested before load completed; ignoring")
            return

        self._pending = tuple(tasks)
        if self._writer is not None and not self._writer.done():
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop; save deferred until flush()")
            return
        self._writer = loop.create_task(self._drain())

    async def _drain(self) -> None:
        while self._pending is not None:
            snapshot = self._pending
            self._pending = None
            try:
                await self.save(snapshot)
                self.last_error = None
            except StorageWriteError as e:
                self.last_error = e
                logger.warning("Save failed (in-memory state kept): %s", e)
                if self.on_save_error is not None:
                    try:
                        self.on_save_error(e)
                    except Exception:
                        logger.exception("on_save_error handler failed")

    @property
    def has_pending(self) -> bool:
        return self._pending is not None or (self._writer is not None and not self._writer.done())

    async def flush(self) -> None:
        """Wait until every queued snapshot has been written (or has failed)."""
        if self._writer is not None and not self._writer.done():
            await self._writer
        if self._pending is not None:
            await self._drain()
