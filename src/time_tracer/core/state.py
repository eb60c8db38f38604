# src/time_tracer/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tracking.tracker import Tracker


@dataclass
class AppState:
    # Settings are kept on the state so command handlers can report them.
    settings: object
    tracker: Tracker
