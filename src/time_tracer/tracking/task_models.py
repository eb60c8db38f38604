# src/time_tracer/tracking/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum

# Ids are 32-bit unsigned integers.
MAX_TASK_ID = 2**32 - 1


class TaskState(StrEnum):
    """
    Task lifecycle.

    created -> running -> ended, each transition at most once.
    """

    CREATED = "created"
    RUNNING = "running"
    ENDED = "ended"


@dataclass(slots=True)
class Task:
    id: int
    name: str

    # Wall-clock unix timestamps (seconds).
    start_time: float
    end_time: float

    state: TaskState = TaskState.CREATED

    # Monotonic reading taken at start, used for the returned duration.
    started_mono: float = 0.0
    elapsed: timedelta | None = None

    def to_record(self) -> str:
        """One save-file line: id,name,start_secs,end_secs (no escaping)."""
        return f"{self.id},{self.name},{int(self.start_time)},{int(self.end_time)}\n"
