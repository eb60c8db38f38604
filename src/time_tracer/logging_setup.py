# src/time_tracer/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

LOG_FILE_NAME = "time_tracer.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Decide what reaches the console (the log file gets everything):
    - our own loggers pass, except the quiet ones below INFO
      (per-task create/start/end chatter)
    - captured warnings and third-party loggers only at ERROR+
    """

    def __init__(
        self,
        app_prefix: str = "time_tracer.",
        quiet_prefixes: Iterable[str] = ("time_tracer.tracking.",),
    ) -> None:
        super().__init__()
        self.app_prefix = app_prefix
        self.quiet_prefixes = tuple(quiet_prefixes)

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(self.app_prefix):
            return record.levelno >= logging.ERROR
        if record.name.startswith(self.quiet_prefixes):
            return record.levelno >= logging.INFO
        return True


def _drop_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    *,
    log_dir: str | Path = ".local/time_tracer",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route all logging to stderr (filtered) and to <log_dir>/time_tracer.log.

    stderr keeps log lines apart from the REPL's own output on stdout.
    Replaces whatever handlers the root logger had. Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_ConsoleNoiseFilter())

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level)

    root = logging.getLogger()
    _drop_handlers(root)
    root.setLevel(logging.DEBUG)
    for handler in (console, file_handler):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.captureWarnings(True)
    return log_file
