# src/time_tracer/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import cast

from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /new, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    try:
        task_id = int(args[0])
    except ValueError:
        return None
    return task_id if task_id >= 0 else None


def _fmt_ts(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


def _fmt_duration(d: timedelta) -> str:
    return f"{d.total_seconds():.3f}s"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_new(state: AppState, args: list[str]) -> str:
    name = " ".join(args).strip()
    if not name:
        return "Usage: /new <name>"
    task_id = state.tracker.new_task(name)
    return f"Created task {task_id}: {name}"


def cmd_start(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /start <id>"
    if state.tracker.start_task(task_id):
        return f"Task {task_id} started."
    return f"Task {task_id} was not started (unknown, already running or already ended)."


def cmd_end(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /end <id>"

    elapsed = state.tracker.end_task(task_id)
    if elapsed is None:
        return f"Task {task_id} is not running."

    outcome = state.tracker.last_save_outcome
    if outcome is not None and not outcome.ok and emit is not None:
        emit(f"[SAVE] Record for task {task_id} was not written to {outcome.path}: {outcome.error}")

    return f"Task {task_id} ended after {_fmt_duration(elapsed)}."


def cmd_count(state: AppState, args: list[str]) -> str:
    return f"Tasks created: {state.tracker.get_task_number()}"


def cmd_running(state: AppState, args: list[str]) -> str:
    ids = state.tracker.running_task_ids()
    if not ids:
        return "No running tasks."
    lines = ["Running tasks:"]
    for task_id in ids:
        task = state.tracker.get_task(task_id)
        if task is None:
            continue
        lines.append(f"  {task.id}. {task.name} (since {_fmt_ts(task.start_time)})")
    return "\n".join(lines)


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /show <id>"
    task = state.tracker.get_task(task_id)
    if task is None:
        return f"No task with id {task_id}."
    lines = [
        f"Task {task.id}: {task.name}",
        f"  State: {task.state}",
        f"  Start: {_fmt_ts(task.start_time)}",
        f"  End:   {_fmt_ts(task.end_time)}",
    ]
    if task.elapsed is not None:
        lines.append(f"  Elapsed: {_fmt_duration(task.elapsed)}")
    return "\n".join(lines)


def cmd_reset(state: AppState, args: list[str]) -> str:
    """
    /reset      -> explain what would happen
    /reset yes  -> delete the save file and restart ids at 0
    """
    if not args or args[0].lower() not in ("yes", "y"):
        path = state.tracker.save_file_path
        return f"This deletes {path or '(no save file)'} and restarts ids at 0. Use /reset yes to confirm."

    logger.debug("Reset requested")
    state.tracker.delete_save_files()
    return "Save file deleted; ids restart at 0."


def cmd_status(state: AppState, args: list[str]) -> str:
    tracker = state.tracker
    save = tracker.save_file_path or "OFF"
    cache = tracker.cache_file_path or "OFF"
    return (
        "Status:\n"
        f"  Save file: {save}\n"
        f"  Id cache: {cache}\n"
        f"  Next id: {tracker.current_id}\n"
        f"  Tasks created: {tracker.get_task_number()}\n"
        f"  Running: {len(tracker.running_task_ids())}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("new", cmd_new, help_text="Create a task: /new <name>.")
registry.register("start", cmd_start, help_text="Start a task: /start <id>.")
registry.register("end", cmd_end, help_text="End a running task and save it: /end <id>.")
registry.register("count", cmd_count, help_text="Number of tasks created.")
registry.register("running", cmd_running, help_text="List running tasks.")
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("reset", cmd_reset, help_text="Delete the save file and restart ids: /reset yes.")
registry.register("status", cmd_status, help_text="Show persistence targets and counters.")
