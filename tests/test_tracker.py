# tests/test_tracker.py

from __future__ import annotations

import time
from datetime import timedelta
from pathlib import Path

import pytest

from time_tracer.tracking.errors import ClockError, IdSpaceExhausted
from time_tracer.tracking.task_models import MAX_TASK_ID, TaskState
from time_tracer.tracking.tracker import Tracker

from .fakes import FakeClock


def test_new_task_increases_task_number(tracker: Tracker) -> None:
    assert tracker.get_task_number() == 0

    tracker.new_task("task1")
    assert tracker.get_task_number() == 1

    tracker.new_task("task2")
    tracker.new_task("task3")
    assert tracker.get_task_number() == 3


def test_ids_are_sequential_from_zero(tracker: Tracker) -> None:
    ids = [tracker.new_task(f"t{i}") for i in range(5)]
    assert ids == [0, 1, 2, 3, 4]
    assert tracker.current_id == 5


def test_new_task_is_not_running(tracker: Tracker, clock: FakeClock) -> None:
    task_id = tracker.new_task("task1")
    task = tracker.get_task(task_id)

    assert task is not None
    assert task.state is TaskState.CREATED
    assert task.start_time == task.end_time == clock.wall_now
    assert not tracker.is_running(task_id)


def test_start_task_succeeds_once(tracker: Tracker) -> None:
    task_id = tracker.new_task("task1")

    assert tracker.start_task(task_id) is True
    assert tracker.start_task(task_id) is False
    assert tracker.running_task_ids() == (task_id,)


def test_start_unknown_task_is_rejected(tracker: Tracker) -> None:
    assert tracker.start_task(42) is False
    assert tracker.running_task_ids() == ()


def test_start_resets_start_time(tracker: Tracker, clock: FakeClock) -> None:
    task_id = tracker.new_task("task1")
    clock.advance(30)
    tracker.start_task(task_id)

    task = tracker.get_task(task_id)
    assert task is not None
    assert task.start_time == clock.wall_now


def test_end_without_start_returns_none(tracker: Tracker) -> None:
    task_id = tracker.new_task("task1")
    assert tracker.end_task(task_id) is None


def test_end_twice_returns_none(tracker: Tracker) -> None:
    task_id = tracker.new_task("task1")
    tracker.start_task(task_id)

    assert tracker.end_task(task_id) is not None
    assert tracker.end_task(task_id) is None


def test_ended_task_cannot_restart(tracker: Tracker) -> None:
    task_id = tracker.new_task("task1")
    tracker.start_task(task_id)
    tracker.end_task(task_id)

    assert tracker.start_task(task_id) is False
    assert tracker.get_task(task_id).state is TaskState.ENDED


def test_end_task_returns_elapsed(tracker: Tracker, clock: FakeClock) -> None:
    task_id = tracker.new_task("task1")
    tracker.start_task(task_id)
    clock.advance(2.5)

    assert tracker.end_task(task_id) == timedelta(seconds=2.5)

    task = tracker.get_task(task_id)
    assert task is not None
    assert task.end_time - task.start_time == pytest.approx(2.5)
    assert task.elapsed == timedelta(seconds=2.5)


def test_end_task_duration_covers_sleep(tmp_path: Path) -> None:
    tracker = Tracker(tmp_path / "save.txt", tmp_path / "cache.txt")
    task_id = tracker.new_task("task1")
    tracker.start_task(task_id)

    time.sleep(0.5)
    duration = tracker.end_task(task_id)

    assert duration is not None
    assert duration >= timedelta(milliseconds=500)


def test_several_tasks_can_run_at_once(tracker: Tracker, clock: FakeClock) -> None:
    a = tracker.new_task("a")
    b = tracker.new_task("b")

    assert tracker.start_task(a)
    clock.advance(1)
    assert tracker.start_task(b)
    assert tracker.running_task_ids() == (a, b)

    clock.advance(1)
    assert tracker.end_task(a) == timedelta(seconds=2)
    assert tracker.running_task_ids() == (b,)
    assert tracker.end_task(b) == timedelta(seconds=1)


def test_wall_clock_going_backwards_is_reported(tracker: Tracker, clock: FakeClock) -> None:
    task_id = tracker.new_task("task1")
    tracker.start_task(task_id)
    clock.jump_wall(-60)

    with pytest.raises(ClockError) as exc_info:
        tracker.end_task(task_id)

    assert exc_info.value.task_id == task_id
    # The failed end leaves the task running, so it can be ended later.
    assert tracker.is_running(task_id)

    # Still behind the start time: retrying fails the same way.
    clock.jump_wall(30)
    with pytest.raises(ClockError):
        tracker.end_task(task_id)

    clock.jump_wall(90)
    assert tracker.end_task(task_id) is not None


def test_get_task_returns_copy(tracker: Tracker) -> None:
    task_id = tracker.new_task("task1")
    copy = tracker.get_task(task_id)
    assert copy is not None

    copy.name = "changed"
    copy.state = TaskState.ENDED

    original = tracker.get_task(task_id)
    assert original is not None
    assert original.name == "task1"
    assert original.state is TaskState.CREATED
    assert tracker.get_task(999) is None


def test_in_memory_tracker_writes_nothing(tmp_path: Path) -> None:
    tracker = Tracker()
    task_id = tracker.new_task("task1")
    tracker.start_task(task_id)

    assert tracker.end_task(task_id) is not None
    assert tracker.last_save_outcome is None
    assert tracker.save_file_path is None
    assert tracker.cache_file_path is None
    assert list(tmp_path.iterdir()) == []


def test_id_space_exhausted(tmp_path: Path) -> None:
    cache = tmp_path / "cache.txt"
    cache.write_text(f"{MAX_TASK_ID}\n", "utf-8")
    tracker = Tracker(None, cache)

    assert tracker.new_task("last") == MAX_TASK_ID
    with pytest.raises(IdSpaceExhausted):
        tracker.new_task("one too many")
    assert tracker.get_task_number() == 1


def test_with_default_paths(tmp_path: Path) -> None:
    tracker = Tracker.with_default_paths(tmp_path)

    assert tracker.save_file_path == tmp_path / "time_tracer_save"
    assert tracker.cache_file_path == tmp_path / "time_tracer_cache"
