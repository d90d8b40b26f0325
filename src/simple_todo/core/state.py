# src/simple_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import Task


@dataclass
class ViewState:
    """
    Everything a renderer needs, owned by one TodoController.

    Renderers read it; only the controller writes it. `tasks` always mirrors
    the TaskStore snapshot. While `loading` is True the list is not known
    yet and must not be shown as empty.
    """

    tasks: tuple[Task, ...] = ()
    draft_text: str = ""
    loading: bool = True
    last_notice: str | None = None
