# src/simple_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the controller, loads stored tasks, then runs
the console REPL until /exit, EOF or Ctrl+C. Pending saves are flushed on
the way out.
"""

from __future__ import annotations

import asyncio
import logging

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from .bootstrap import create_controller
from .console_connector import run_console_loop

logger = logging.getLogger(__name__)


async def _run(settings: Settings) -> None:
    controller = create_controller(settings=settings)
    try:
        await controller.start()
        await run_console_loop(controller, app_name=settings.app_name)
    finally:
        await controller.shutdown()


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)
    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
