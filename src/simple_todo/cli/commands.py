# src/simple_todo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.controller import TodoController
from ..tasks.task_models import Task
from .render import numbered_tasks, render_list

CommandHandler = Callable[[TodoController, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, controller: TodoController, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%s", name, args)
        return await handler(controller, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Any line not starting with / is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task(controller: TodoController, ref: str) -> Task | None:
    """Accept the on-screen number first, then a raw task id."""
    shown = numbered_tasks(controller.groups())
    if ref.isdigit():
        n = int(ref)
        if 1 <= n <= len(shown):
            return shown[n - 1]
    return controller.store.get(ref)


async def cmd_help(controller: TodoController, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(controller: TodoController, args: list[str]) -> str:
    return render_list(controller)


async def cmd_add(controller: TodoController, args: list[str]) -> str:
    task = controller.add_task(" ".join(args))
    if task is None:
        # the notifier already showed why
        return ""
    return render_list(controller)


async def cmd_done(controller: TodoController, args: list[str]) -> str:
    """
    /done <n|id>  -> toggle completion of one task
    """
    if not args:
        return "Usage: /done <number or id>"
    task = resolve_task(controller, args[0])
    if task is None or not controller.toggle_task(task.id):
        return f"No task {args[0]}."
    return render_list(controller)


async def cmd_delete(controller: TodoController, args: list[str]) -> str:
    if not args:
        return "Usage: /del <number or id>"
    task = resolve_task(controller, args[0])
    if task is None:
        return f"No task {args[0]}."
    if not await controller.delete_task(task.id):
        return "Cancelled."
    return render_list(controller)


async def cmd_toggle_all(controller: TodoController, args: list[str]) -> str:
    if len(controller.store) == 0:
        return "Nothing to toggle."
    if not controller.toggle_all():
        return ""
    return render_list(controller)


async def cmd_clear(controller: TodoController, args: list[str]) -> str:
    if not controller.store.completed_tasks():
        await controller.clear_completed()
        return ""
    removed = await controller.clear_completed()
    if removed == 0:
        return "Cancelled."
    return f"Removed {removed} completed task(s).\n{render_list(controller)}"


async def cmd_wipe(controller: TodoController, args: list[str]) -> str:
    if len(controller.store) == 0:
        await controller.delete_all()
        return ""
    if not await controller.delete_all():
        return "Cancelled."
    return render_list(controller)


async def cmd_stats(controller: TodoController, args: list[str]) -> str:
    s = controller.stats()
    return (
        "Statistics:\n"
        f"  Total: {s.total}\n"
        f"  Completed: {s.completed}\n"
        f"  Pending: {s.pending}\n"
        f"  Progress: {s.progress_percent}%"
    )


async def cmd_export(controller: TodoController, args: list[str]) -> str:
    target = await controller.export()
    if target is None:
        return ""
    return f"Exported to {target}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks grouped by day.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"])
registry.register("done", cmd_done, help_text="Toggle a task: /done <n|id>.", aliases=["d"])
registry.register("del", cmd_delete, help_text="Delete a task (asks first): /del <n|id>.", aliases=["rm"])
registry.register("all", cmd_toggle_all, help_text="Mark all done, or all pending if all are done.")
registry.register("clear", cmd_clear, help_text="Remove completed tasks (asks first).")
registry.register("wipe", cmd_wipe, help_text="Delete every task (asks twice).")
registry.register("stats", cmd_stats, help_text="Show counts and progress.")
registry.register("export", cmd_export, help_text="Write all tasks to a JSON file.")
