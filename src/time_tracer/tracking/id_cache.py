# src/time_tracer/tracking/id_cache.py

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

from .errors import CacheFileError, Severity, WriteOutcome
from .task_models import MAX_TASK_ID

logger = logging.getLogger(__name__)


class IdCache:
    """
    Persisted next-id counter.

    File format: the decimal next id followed by a newline ("42\\n").
    A missing file means "start at 0". Anything else that cannot be read
    back as an id is fatal, so ids are never silently reused.

    Writes go to a sibling temp file which then replaces the cache,
    so readers never see a half-written counter.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> int:
        if not self._path.exists():
            logger.debug("No id cache at %s, starting at 0", self._path)
            return 0

        try:
            raw = self._path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheFileError(self._path, f"cannot read ({e})") from e

        text = raw.strip()
        # Plain ASCII digits only: int() would also take "+5", "1_0" or non-ASCII digits.
        if not (text.isascii() and text.isdigit()):
            raise CacheFileError(self._path, f"not a decimal id: {text!r}")
        next_id = int(text)

        # MAX_TASK_ID + 1 is legal: it is what remains after the last id was handed out.
        if next_id > MAX_TASK_ID + 1:
            raise CacheFileError(self._path, f"id out of range: {next_id}")

        logger.info("Loaded id cache %s next_id=%s", self._path, next_id)
        return next_id

    def store(self, next_id: int) -> WriteOutcome:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(f"{next_id}\n", encoding="utf-8", newline="")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            logger.error("Failed to write id cache %s: %s", self._path, e)
            return WriteOutcome(self._path, Severity.FATAL, e)

        return WriteOutcome(self._path, Severity.FATAL)
