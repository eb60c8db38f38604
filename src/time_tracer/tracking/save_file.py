# src/time_tracer/tracking/save_file.py

from __future__ import annotations

import logging
from pathlib import Path

from .errors import Severity, WriteOutcome
from .task_models import Task

logger = logging.getLogger(__name__)


class SaveFile:
    """
    Append-only log of ended tasks.

    One line per task, in the order tasks end:
        id,name,start_time_unix_seconds,end_time_unix_seconds

    There is no header and names are written as-is, so a name containing
    a comma (or a newline) breaks the field layout for that line.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def append(self, task: Task) -> WriteOutcome:
        """Append one record. Never raises on I/O or encoding errors: the outcome carries them."""
        if "," in task.name or "\n" in task.name:
            logger.warning(
                "Task id=%s name=%r contains a separator; its save-file line will not parse cleanly.",
                task.id,
                task.name,
            )

        try:
            # Encoded before opening so an unencodable name never leaves a partial line.
            data = task.to_record().encode("utf-8")
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "ab") as f:
                f.write(data)
        except (OSError, UnicodeError) as e:
            logger.warning("Failed to append task id=%s to %s: %s", task.id, self._path, e)
            return WriteOutcome(self._path, Severity.DEGRADED, e)

        logger.debug("Saved task id=%s to %s", task.id, self._path)
        return WriteOutcome(self._path, Severity.DEGRADED)

    def delete(self) -> bool:
        """Remove the file. Returns False if there was nothing to remove."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        logger.info("Deleted save file %s", self._path)
        return True
