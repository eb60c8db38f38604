# src/time_tracer/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- builds the Tracker with the persistence targets the settings enable.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tracking.tracker import Tracker

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.persist_records:
        settings.save_file_path.parent.mkdir(parents=True, exist_ok=True)
    if settings.persist_ids:
        settings.cache_file_path.parent.mkdir(parents=True, exist_ok=True)


def create_tracker(settings) -> Tracker:
    save_path = settings.save_file_path if settings.persist_records else None
    cache_path = settings.cache_file_path if settings.persist_ids else None
    if save_path is None and cache_path is None:
        logger.info("Persistence disabled: tasks live in memory only.")
    return Tracker(save_path, cache_path)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    Raises CacheFileError if an existing id cache cannot be read back.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(settings=settings, tracker=create_tracker(settings))
