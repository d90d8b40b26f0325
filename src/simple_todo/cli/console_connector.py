# src/simple_todo/cli/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable, Sequence
from datetime import datetime

from ..core.controller import TodoController
from ..core.ports import ConfirmOption, NoticeLevel
from .commands import CommandRegistry
from .commands import registry as default_registry
from .render import render_header, render_list

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]

_YES = {"y", "yes"}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


async def _read_line(input_fn: InputFn, prompt: str) -> str | None:
    """
    Blocking input() on a daemon thread; None on EOF.

    Ctrl+C lands on the main thread and cancels the awaiting coroutine.
    The reader thread is left blocked in input() and does not keep the
    process (or asyncio.run's executor shutdown) waiting for a line.
    """
    loop = asyncio.get_running_loop()
    result: asyncio.Future[str | None] = loop.create_future()

    def _deliver(line: str | None, error: Exception | None) -> None:
        if result.done():
            return
        if error is not None:
            result.set_exception(error)
        else:
            result.set_result(line)

    def _reader() -> None:
        line, error = None, None
        try:
            line = input_fn(prompt)
        except EOFError:
            pass
        except Exception as e:
            error = e
        # the loop may be closed by now (interrupted session)
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_deliver, line, error)

    threading.Thread(target=_reader, name="console-input", daemon=True).start()
    return await result


class ConsoleNotifier:
    def __init__(self, out: Callable[[str], None] = print) -> None:
        self._out = out

    def notify(self, level: NoticeLevel, message: str) -> None:
        tag = "" if level is NoticeLevel.INFO else f"[{level.value.upper()}] "
        self._out(f"[{_ts_local()}] {tag}{message}")


class ConsoleConfirmer:
    """
    y/N prompt on the terminal.

    "y"/"yes" picks the affirmative option offered (destructive one first);
    anything else, including EOF, is a cancel.
    """

    def __init__(self, input_fn: InputFn = input, out: Callable[[str], None] = print) -> None:
        self._input = input_fn
        self._out = out

    async def confirm(
            self,
            title: str,
            message: str,
            options: Sequence[ConfirmOption],
    ) -> ConfirmOption:
        self._out(f"{title}: {message}")
        answer = await _read_line(self._input, "[y/N] ")
        if answer is None or answer.strip().lower() not in _YES:
            return ConfirmOption.CANCEL

        for opt in (ConfirmOption.DESTRUCTIVE_AFFIRM, ConfirmOption.AFFIRM):
            if opt in options:
                return opt
        return ConfirmOption.CANCEL


async def run_console_loop(
        controller: TodoController,
        *,
        app_name: str,
        registry: CommandRegistry | None = None,
        input_fn: InputFn = input,
        out: Callable[[str], None] = print,
) -> None:
    registry = registry or default_registry
    logger.info("Console connector started.")

    out(render_header(app_name))
    out(render_list(controller))
    out("Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    while True:
        line = await _read_line(input_fn, "> ")
        if line is None:
            logger.info("Console EOF received, exiting.")
            break

        line = line.strip()
        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await registry.handle(controller, line)
            if reply is None:
                reply = "" if controller.add_task(line) is None else render_list(controller)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            out(reply)

    logger.info("Console connector finished.")
