"""Focus mode - phase scheduler, Markdown session log and statistics."""

from .analytics import FocusStats, PeriodStats, StatsAggregator
from .history import SessionLogStore
from .scheduler import PhaseScheduler, SchedulerListener
from .state import ActiveSession, LogEntry, Phase, PhaseKind, SchedulerState
from .storage import DocumentStore, FileDocumentStore

__all__ = [
    "ActiveSession",
    "DocumentStore",
    "FileDocumentStore",
    "FocusStats",
    "LogEntry",
    "PeriodStats",
    "Phase",
    "PhaseKind",
    "PhaseScheduler",
    "SchedulerListener",
    "SchedulerState",
    "SessionLogStore",
    "StatsAggregator",
]
