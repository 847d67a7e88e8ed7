"""Scheduler listeners that connect the timer to the log and the terminal."""

from __future__ import annotations

from rich.console import Console

from pomolog_cli.utils.logger import get_logger
from pomolog_cli.utils.ui.formatters import format_error

from .history import SessionLogStore
from .scheduler import SchedulerListener
from .state import LogEntry


class SessionLogWriter(SchedulerListener):
    """
    Appends every finished focus session to the log store.

    A failed write is reported and remembered, but the timer keeps its new
    state: the session still counts as ended.
    """

    def __init__(self, log_store: SessionLogStore):
        self.log_store = log_store
        self.logged: list[LogEntry] = []
        self.failed: list[tuple[LogEntry, OSError]] = []
        self.logger = get_logger("listeners")

    def on_session_end(self, entry: LogEntry) -> None:
        try:
            self.log_store.append(entry)
        except OSError as e:
            self.logger.error("failed to log session %s: %s", entry.to_dict(), e)
            self.failed.append((entry, e))
            format_error(f"Could not write session to the log: {e}")
            return
        self.logged.append(entry)


class CompletionBell(SchedulerListener):
    """Rings the terminal bell whenever a phase runs out."""

    def __init__(self, console: Console):
        self.console = console

    def on_phase_end(self) -> None:
        self.console.bell()
