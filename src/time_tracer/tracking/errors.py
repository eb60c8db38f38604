# src/time_tracer/tracking/errors.py

"""
Error kinds for the tracker.

Two file targets, two severities:
- the id cache is required state: failures are FATAL and raised as CacheFileError
- the save file is a best-effort log: failures are DEGRADED and only reported

Rejections (double start, ending a task that is not running, unknown ids)
are not errors at all: they are signalled by False / None return values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class Severity(StrEnum):
    FATAL = "fatal"
    DEGRADED = "degraded"


@dataclass(frozen=True, slots=True)
class WriteOutcome:
    """Result of one persistence write. `error is None` means it succeeded."""

    path: Path
    severity: Severity
    error: OSError | UnicodeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TrackerError(RuntimeError):
    severity: Severity = Severity.FATAL


class CacheFileError(TrackerError):
    """The id cache could not be read, parsed or written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"id cache {self.path}: {reason}")


class ClockError(TrackerError):
    """Wall clock reported a time earlier than the task start."""

    def __init__(self, task_id: int, start_time: float, now: float) -> None:
        self.task_id = task_id
        self.start_time = start_time
        self.now = now
        super().__init__(
            f"clock went backwards for task {task_id}: start={start_time:.6f} now={now:.6f}"
        )


class IdSpaceExhausted(TrackerError):
    def __init__(self, next_id: int) -> None:
        self.next_id = next_id
        super().__init__(f"no task ids left (next id would be {next_id})")
