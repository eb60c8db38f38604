"""
Task tracking subsystem.

Components:
- task_models.py: data structures (Task, TaskState)
- errors.py: severity-tagged persistence outcomes and tracker errors
- save_file.py: append-only log of ended tasks
- id_cache.py: persisted next-id counter (survives restarts)
- tracker.py: Tracker, owns the registry and drives the lifecycle
"""

from .errors import CacheFileError, ClockError, IdSpaceExhausted, Severity, TrackerError, WriteOutcome
from .task_models import MAX_TASK_ID, Task, TaskState
from .tracker import Tracker

__all__ = [
    "MAX_TASK_ID",
    "CacheFileError",
    "ClockError",
    "IdSpaceExhausted",
    "Severity",
    "Task",
    "TaskState",
    "Tracker",
    "TrackerError",
    "WriteOutcome",
]
