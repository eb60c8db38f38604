# src/time_tracer/tracking/tracker.py

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path

from .errors import CacheFileError, ClockError, IdSpaceExhausted, WriteOutcome
from .id_cache import IdCache
from .save_file import SaveFile
from .task_models import MAX_TASK_ID, Task, TaskState

logger = logging.getLogger(__name__)

DEFAULT_SAVE_FILE = "time_tracer_save"
DEFAULT_CACHE_FILE = "time_tracer_cache"


class Tracker:
    """
    In-process task timing tracker.

    Owns every Task it creates (keyed by id) and the ordered set of running ids.
    Persistence is optional and decided by the paths given:
    - save_file_path: append one line per ended task (best-effort)
    - cache_file_path: persist the next id after every allocation (required)

    Not thread-safe: one Tracker per save/cache file pair, driven from one thread.
    """

    def __init__(
        self,
        save_file_path: str | Path | None = None,
        cache_file_path: str | Path | None = None,
        *,
        clock: Callable[[], float] = time.time,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._save_file = SaveFile(save_file_path) if save_file_path is not None else None
        self._id_cache = IdCache(cache_file_path) if cache_file_path is not None else None
        self._clock = clock
        self._monotonic = monotonic

        self._tasks: dict[int, Task] = {}
        self._running: list[int] = []
        self.last_save_outcome: WriteOutcome | None = None

        self.current_id = self._id_cache.load() if self._id_cache is not None else 0

        logger.info(
            "Tracker ready save=%s cache=%s next_id=%s",
            self.save_file_path,
            self.cache_file_path,
            self.current_id,
        )

    @classmethod
    def with_default_paths(cls, directory: str | Path = ".") -> Tracker:
        base = Path(directory)
        return cls(base / DEFAULT_SAVE_FILE, base / DEFAULT_CACHE_FILE)

    @property
    def save_file_path(self) -> Path | None:
        return self._save_file.path if self._save_file is not None else None

    @property
    def cache_file_path(self) -> Path | None:
        return self._id_cache.path if self._id_cache is not None else None

    # ---- registry ----

    def new_task(self, name: str) -> int:
        """
        Register a task and return its id.

        With an id cache, the new counter is written before the task becomes
        visible; if that write fails, CacheFileError is raised and nothing changes.
        """
        task_id = self.current_id
        if task_id > MAX_TASK_ID:
            raise IdSpaceExhausted(task_id)

        next_id = task_id + 1
        if self._id_cache is not None:
            outcome = self._id_cache.store(next_id)
            if not outcome.ok:
                raise CacheFileError(outcome.path, f"cannot write ({outcome.error})") from outcome.error

        if task_id in self._tasks:
            # Only possible after a reset re-issues ids.
            logger.warning("Task id=%s re-issued after reset; replacing %r", task_id, self._tasks[task_id].name)
            self._discard_running(task_id)

        now = self._clock()
        self._tasks[task_id] = Task(id=task_id, name=name, start_time=now, end_time=now)
        self.current_id = next_id

        logger.debug("Task created id=%s name=%r", task_id, name)
        return task_id

    def get_task_number(self) -> int:
        return len(self._tasks)

    def get_task(self, task_id: int) -> Task | None:
        """Detached copy of a task, or None if the id is unknown."""
        task = self._tasks.get(task_id)
        return dataclasses.replace(task) if task is not None else None

    def running_task_ids(self) -> tuple[int, ...]:
        return tuple(self._running)

    def is_running(self, task_id: int) -> bool:
        return task_id in self._running

    # ---- lifecycle ----

    def start_task(self, task_id: int) -> bool:
        """created -> running. False if already running, already ended or unknown."""
        if task_id in self._running:
            return False

        task = self._tasks.get(task_id)
        if task is None or task.state is not TaskState.CREATED:
            return False

        task.start_time = self._clock()
        task.started_mono = self._monotonic()
        task.state = TaskState.RUNNING
        self._running.append(task_id)

        logger.debug("Task started id=%s", task_id)
        return True

    def end_task(self, task_id: int) -> timedelta | None:
        """
        running -> ended. Returns the elapsed time, or None if the task is not running.

        The record is then appended to the save file (if any). A failed append is
        logged and kept in `last_save_outcome`; the task still counts as ended.

        Raises ClockError, leaving the task running, if the wall clock now reads
        earlier than the task's start_time. Retries keep failing until the clock
        is past start_time again, so after a large backwards correction the task
        stays unendable for that long.
        """
        if task_id not in self._running:
            return None

        task = self._tasks.get(task_id)
        if task is None:
            self._discard_running(task_id)
            return None

        now = self._clock()
        if now < task.start_time:
            raise ClockError(task_id, task.start_time, now)

        elapsed = timedelta(seconds=self._monotonic() - task.started_mono)

        task.end_time = now
        task.elapsed = elapsed
        task.state = TaskState.ENDED
        self._discard_running(task_id)

        logger.debug("Task ended id=%s elapsed=%s", task_id, elapsed)

        if self._save_file is not None:
            self.last_save_outcome = self._save_file.append(task)

        return elapsed

    # ---- persistence ----

    def delete_save_files(self) -> None:
        """
        Remove the save file (no-op if absent) and restart ids at 0.

        The id cache, when configured, is rewritten to 0 first so that a
        restart agrees with the in-memory counter. If that write fails,
        CacheFileError is raised and neither the save file nor the counter
        is touched.
        """
        if self._id_cache is not None:
            outcome = self._id_cache.store(0)
            if not outcome.ok:
                raise CacheFileError(outcome.path, f"cannot reset ({outcome.error})") from outcome.error

        self.current_id = 0

        if self._save_file is not None:
            self._save_file.delete()

        logger.info("Tracker reset: next_id=0")

    def _discard_running(self, task_id: int) -> None:
        self._running = [x for x in self._running if x != task_id]
