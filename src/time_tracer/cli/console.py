# src/time_tracer/cli/console.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.state import AppState
from ..tracking.errors import TrackerError
from .commands import registry as command_registry

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def run_console_loop(state: AppState) -> None:
    logger.info("Console started.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input, emit=_print_ts)
        except TrackerError as e:
            logger.error("Command failed (%s): %s", e.severity, e)
            _print_ts(f"[ERROR] {e}")
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            _print_ts("Internal error while handling a command.")
            continue

        if response is None:
            _print_ts("Commands start with '/'. Use /help to list them.")
            continue

        _print_ts(response)

    logger.info("Console finished.")
