# src/simple_todo/cli/render.py

from __future__ import annotations

from datetime import date

from ..core.controller import TodoController
from ..tasks.task_models import Task
from ..tasks.task_views import DateGroup

SUBTITLE = "Stay organized and productive"
EMPTY_HINT = "Add your first task above!"


def render_header(app_name: str) -> str:
    return f"== {app_name} ==\n{SUBTITLE}"


def numbered_tasks(groups: list[DateGroup]) -> list[Task]:
    """Tasks in display order; list index + 1 is the number shown on screen."""
    return [t for g in groups for t in g.tasks]


def render_task(n: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"{n:>3}. [{mark}] {task.text}  ({task.created_at})"


def render_list(controller: TodoController, *, today: date | None = None) -> str:
    state = controller.state
    if state.loading:
        return "Loading tasks..."

    stats = controller.stats()
    if stats.total == 0:
        return f"No tasks yet.\n{EMPTY_HINT}"

    lines = [
        f"Total: {stats.total} | Done: {stats.completed} | "
        f"Pending: {stats.pending} | Progress: {stats.progress_percent}%"
    ]
    n = 0
    for group in controller.groups(today):
        lines.append("")
        lines.append(f"{group.label} ({len(group.tasks)})")
        for task in group.tasks:
            n += 1
            lines.append(render_task(n, task))
    return "\n".join(lines)
