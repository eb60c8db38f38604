# src/time_tracer/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (settings + Tracker), then runs the
console REPL in the main thread.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.console import run_console_loop
from ..config import get_settings
from ..logging_setup import setup_logging
from ..tracking.errors import CacheFileError

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except CacheFileError as e:
        logger.error("Cannot start: %s", e)
        sys.exit(1)

    try:
        run_console_loop(state)
    finally:
        running = state.tracker.running_task_ids()
        if running:
            logger.warning("Exiting with %d running task(s) not saved: %s", len(running), list(running))
        logger.info("Bye.")


if __name__ == "__main__":
    main()
