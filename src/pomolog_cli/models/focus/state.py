"""Timer phases, session state and log entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class PhaseKind(str, Enum):
    """Mode of the timer."""

    IDLE = "idle"
    FOCUS = "focus"
    BREAK = "break"
    PAUSED = "paused"


@dataclass(frozen=True)
class Phase:
    """Current phase; a paused phase remembers the phase it suspended."""

    kind: PhaseKind
    suspended: PhaseKind | None = None

    def __post_init__(self) -> None:
        if self.kind == PhaseKind.PAUSED:
            if self.suspended not in (PhaseKind.FOCUS, PhaseKind.BREAK):
                raise ValueError("A paused phase must suspend focus or break")
        elif self.suspended is not None:
            raise ValueError(f"Phase {self.kind.value} cannot suspend another phase")

    @classmethod
    def paused(cls, prior: "Phase") -> "Phase":
        """Build the paused variant of a running phase."""
        return cls(PhaseKind.PAUSED, prior.kind)

    @property
    def is_running(self) -> bool:
        """True while the countdown should receive ticks."""
        return self.kind in (PhaseKind.FOCUS, PhaseKind.BREAK)

    @property
    def is_paused(self) -> bool:
        return self.kind == PhaseKind.PAUSED

    def resumed(self) -> "Phase":
        """The phase to return to when a paused phase resumes."""
        if self.suspended is None:
            raise ValueError("Only a paused phase can be resumed")
        return Phase(self.suspended)

    def __str__(self) -> str:
        if self.suspended is not None:
            return f"{self.kind.value}({self.suspended.value})"
        return self.kind.value


IDLE = Phase(PhaseKind.IDLE)
FOCUS = Phase(PhaseKind.FOCUS)
BREAK = Phase(PhaseKind.BREAK)


@dataclass(frozen=True)
class ActiveSession:
    """Details of the session that started on the last Idle -> Focus move."""

    start_timestamp: datetime
    tag: str
    focus_minutes: int
    break_minutes: int


@dataclass
class SchedulerState:
    """Mutable state owned by a PhaseScheduler."""

    phase: Phase = IDLE
    remaining_seconds: int = 0
    active_session: ActiveSession | None = None

    def __post_init__(self) -> None:
        if self.remaining_seconds < 0:
            raise ValueError("remaining_seconds cannot be negative")
        if (self.phase == IDLE) != (self.active_session is None):
            raise ValueError("An active session exists iff the timer is not idle")


@dataclass(frozen=True)
class LogEntry:
    """One focus session, completed or stopped early."""

    start_timestamp: datetime
    end_timestamp: datetime
    duration_minutes: int
    tag: str

    def __post_init__(self) -> None:
        if self.duration_minutes < 0:
            raise ValueError("duration_minutes cannot be negative")

    @property
    def date(self) -> date:
        """Calendar date the entry is filed under."""
        return self.start_timestamp.date()

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "start_time": self.start_timestamp.isoformat(),
            "end_time": self.end_timestamp.isoformat(),
            "duration_minutes": self.duration_minutes,
            "tag": self.tag,
        }
