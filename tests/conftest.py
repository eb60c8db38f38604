# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from time_tracer.core.state import AppState
from time_tracer.tracking.tracker import Tracker

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and command handlers.

    A SimpleNamespace rather than the real config keeps tests independent
    of the environment and of any local .env file.
    """
    return SimpleNamespace(
        app_name="time-tracer",
        log_level="INFO",
        data_dir=tmp_path,
        save_file_path=tmp_path / "save.txt",
        cache_file_path=tmp_path / "cache.txt",
        persist_records=True,
        persist_ids=True,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def tracker(settings: SimpleNamespace, clock: FakeClock) -> Tracker:
    """Full variant (save file + id cache) driven by a fake clock."""
    return Tracker(
        settings.save_file_path,
        settings.cache_file_path,
        clock=clock.wall,
        monotonic=clock.mono,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, tracker: Tracker) -> AppState:
    return AppState(settings=settings, tracker=tracker)
