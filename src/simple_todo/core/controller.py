# src/simple_todo/core/controller.py

from __future__ import annotations

"""
TodoController: the single view-model.

Owns the ViewState, funnels every mutation through TaskStore and lets the
PersistenceBridge write the resulting snapshot in the background.

Flow:
- start(): load once, seed the store, leave the loading state
- mutation: TaskStore updates synchronously -> listener -> schedule_save()
- reads (stats/groups): pure functions over the current snapshot

Destructive operations ask the ConfirmationProvider first; the store itself
never prompts.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime
from pathlib import Path

from ..errors import StorageReadError, StorageWriteError, ValidationError
from ..export import build_export_snapshot
from ..storage.bridge import PersistenceBridge
from ..tasks.task_models import Task
from ..tasks.task_store import DEFAULT_DATE_FORMAT, TaskSnapshot, TaskStore
from ..tasks.task_views import DateGroup, TaskStats, compute_stats, group_by_date
from .confirm import ConfirmationWorkflow, ConfirmStep
from .ports import ConfirmationProvider, ConfirmOption, ExportSink, NoticeLevel, Notifier
from .state import ViewState

logger = logging.getLogger(__name__)

_DESTRUCTIVE = (ConfirmOption.CANCEL, ConfirmOption.DESTRUCTIVE_AFFIRM)


class TodoController:
    def __init__(
        self,
        store: TaskStore,
        bridge: PersistenceBridge,
        confirmer: ConfirmationProvider,
        notifier: Notifier,
        *,
        export_sink: ExportSink | None = None,
        clock: Callable[[], datetime] | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
        confirm_destructive: bool = True,
    ) -> None:
        self.store = store
        self.bridge = bridge
        self.confirmer = confirmer
        self.notifier = notifier
        self.export_sink = export_sink
        self._clock = clock or datetime.now
        self._date_format = date_format
        self._confirm_destructive = confirm_destructive

        self.state = ViewState(tasks=store.tasks)

        store.subscribe(self._on_store_changed)
        bridge.on_save_error = self._on_save_error

    # ---- wiring ----

    def _on_store_changed(self, tasks: TaskSnapshot) -> None:
        self.state.tasks = tasks
        self.bridge.schedule_save(tasks)

    def _on_save_error(self, err: StorageWriteError) -> None:
        self._notify(NoticeLevel.ERROR, "Failed to save tasks")

    def _notify(self, level: NoticeLevel, message: str) -> None:
        self.state.last_notice = message
        try:
            self.notifier.notify(level, message)
        except Exception:
            logger.exception("Notifier failed for message=%r", message)

    def _ready(self) -> bool:
        if self.state.loading:
            self._notify(NoticeLevel.INFO, "Still loading tasks, please wait")
            return False
        return True

    async def _confirm(self, steps: Sequence[ConfirmStep]) -> bool:
        if not self._confirm_destructive:
            return True
        return await ConfirmationWorkflow(self.confirmer, steps).run()

    # ---- lifecycle ----

    async def start(self) -> None:
        if not self.state.loading:
            return

        try:
            tasks = await self.bridge.load()
        except StorageReadError as e:
            logger.warning("Starting with an empty list: %s", e)
            self._notify(NoticeLevel.ERROR, "Failed to load tasks")
            tasks = []
            # the next save replaces the stored blob, keep a copy first
            await self.bridge.backup_unreadable()
            self.bridge.mark_loaded()

        self.store.replace_all(tasks)
        self.state.tasks = self.store.tasks
        self.state.loading = False
        logger.info("Controller ready with %d task(s)", len(tasks))

    async def shutdown(self) -> None:
        await self.bridge.flush()

    # ---- mutations ----

    def set_draft(self, text: str) -> None:
        self.state.draft_text = text

    def add_task(self, text: str | None = None) -> Task | None:
        if not self._ready():
            return None

        raw = self.state.draft_text if text is None else text
        try:
            task = self.store.add(raw)
        except ValidationError as e:
            self._notify(NoticeLevel.WARNING, str(e))
            return None

        self.state.draft_text = ""
        return task

    def toggle_task(self, task_id: str) -> bool:
        if not self._ready():
            return False
        return self.store.toggle(task_id)

    async def delete_task(self, task_id: str) -> bool:
        if not self._ready():
            return False

        task = self.store.get(task_id)
        if task is None:
            return False

        step = ConfirmStep(
            title="Delete Task",
            message=f'Are you sure you want to delete "{task.text}"?',
            options=_DESTRUCTIVE,
        )
        if not await self._confirm([step]):
            return False
        return self.store.delete(task_id)

    async def delete_all(self) -> bool:
        if not self._ready():
            return False

        confirmed_ids = [t.id for t in self.store.tasks]
        n = len(confirmed_ids)
        if n == 0:
            self._notify(NoticeLevel.INFO, "No tasks to delete")
            return False

        steps = [
            ConfirmStep(
                title="Delete All Tasks",
                message=f"Are you sure you want to delete all {n} task(s)?",
                options=(ConfirmOption.CANCEL, ConfirmOption.AFFIRM),
            ),
            ConfirmStep(
                title="Final Confirmation",
                message="This action cannot be undone. Delete everything?",
                options=_DESTRUCTIVE,
            ),
        ]
        if not await self._confirm(steps):
            return False
        # tasks added while the prompt was open were not part of the answer
        return self.store.delete_many(confirmed_ids) > 0

    def toggle_all(self) -> bool:
        if not self._ready():
            return False
        return self.store.toggle_all_completion()

    async def clear_completed(self) -> int:
        if not self._ready():
            return 0

        confirmed_ids = {t.id for t in self.store.completed_tasks()}
        n = len(confirmed_ids)
        if n == 0:
            self._notify(NoticeLevel.INFO, "No completed tasks to clear")
            return 0

        step = ConfirmStep(
            title="Clear Completed",
            message=f"Remove {n} completed task(s)?",
            options=_DESTRUCTIVE,
        )
        if not await self._confirm([step]):
            return 0

        # only what was named in the prompt and is still completed now
        still_done = {t.id for t in self.store.completed_tasks()}
        return self.store.delete_many(confirmed_ids & still_done)

    # ---- reads ----

    def stats(self) -> TaskStats:
        return compute_stats(self.store.tasks)

    def groups(self, today: date | None = None) -> list[DateGroup]:
        if today is None:
            today = self._clock().date()
        return group_by_date(self.store.tasks, today=today, date_format=self._date_format)

    async def export(self) -> Path | str | None:
        if self.export_sink is None:
            self._notify(NoticeLevel.WARNING, "Export is not available")
            return None

        snapshot = build_export_snapshot(self.store.tasks, now=self._clock())
        try:
            target = await self.export_sink.deliver(snapshot)
        except Exception:
            logger.exception("Export failed")
            self._notify(NoticeLevel.ERROR, "Failed to export tasks")
            return None

        self._notify(NoticeLevel.INFO, f"Exported {snapshot['totalTasks']} task(s)")
        return target
