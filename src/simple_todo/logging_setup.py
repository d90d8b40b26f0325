# src/simple_todo/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "simple_todo.log"

_FORMAT = logging.Formatter(
    fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keeps stderr readable next to the task list.

    Records from the simple_todo package pass at the handler level; captured
    warnings and other libraries only reach the terminal at ERROR or above.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == "simple_todo" or name.startswith("simple_todo."):
            return True
        return record.levelno >= logging.ERROR


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_FORMAT)
    handler.addFilter(_ConsoleNoiseFilter())
    return handler


def _file_handler(path: Path, level: int) -> logging.Handler:
    handler = logging.FileHandler(str(path), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(_FORMAT)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/simple_todo",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route the app's logs to stderr and to `<log_dir>/simple_todo.log`.

    The terminal only shows warnings by default (load/save failures, skipped
    records); the file keeps every store mutation and save at DEBUG.
    Handlers from an earlier call are replaced, so calling it twice does not
    double the output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(_console_handler(console_level))
    root.addHandler(_file_handler(log_file, file_level))

    # warnings.warn() ends up as 'py.warnings' records
    logging.captureWarnings(True)
    return log_file
