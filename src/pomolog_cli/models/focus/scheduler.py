"""Focus/break phase state machine driven by an external one-second clock."""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import datetime

from pomolog_cli.utils.logger import get_logger

from .state import (
    BREAK,
    FOCUS,
    IDLE,
    ActiveSession,
    LogEntry,
    Phase,
    SchedulerState,
)


class SchedulerListener:
    """Receives scheduler events. Override only the hooks you need."""

    def on_state_change(self, phase: Phase, remaining_seconds: int) -> None:
        pass

    def on_tick(self, remaining_seconds: int) -> None:
        pass

    def on_phase_end(self) -> None:
        pass

    def on_session_end(self, entry: LogEntry) -> None:
        pass


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two timestamps, rounded half-up, never negative."""
    seconds = max(0.0, (end - start).total_seconds())
    return math.floor(seconds / 60 + 0.5)


class PhaseScheduler:
    """
    Owns the timer state and drives Idle -> Focus -> Break -> Idle.

    The scheduler never sleeps or reads a clock on its own schedule. Whoever
    owns the clock calls ``tick()`` once per second while ``is_running`` is
    true. Events are published synchronously to subscribed listeners; on
    focus completion the order is always phase end, session end, then the
    state change into the break.
    """

    def __init__(
        self,
        now: Callable[[], datetime] | None = None,
        state: SchedulerState | None = None,
    ):
        self._now = now or datetime.now
        self.state = state or SchedulerState()
        self._listeners: list[SchedulerListener] = []
        self.logger = get_logger("scheduler")

    # -- observers -----------------------------------------------------------

    def subscribe(self, listener: SchedulerListener) -> None:
        """Register a listener; events are delivered in subscription order."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: SchedulerListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit_state_change(self) -> None:
        phase, remaining = self.state.phase, self.state.remaining_seconds
        self.logger.debug("state change: %s (%ss)", phase, remaining)
        for listener in list(self._listeners):
            listener.on_state_change(phase, remaining)

    def _emit_tick(self) -> None:
        for listener in list(self._listeners):
            listener.on_tick(self.state.remaining_seconds)

    def _emit_phase_end(self) -> None:
        self.logger.debug("phase end: %s", self.state.phase)
        for listener in list(self._listeners):
            listener.on_phase_end()

    def _emit_session_end(self, entry: LogEntry) -> None:
        self.logger.info(
            "session end: tag=%r duration=%smin", entry.tag, entry.duration_minutes
        )
        for listener in list(self._listeners):
            listener.on_session_end(entry)

    # -- read-only views -----------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def remaining_seconds(self) -> int:
        return self.state.remaining_seconds

    @property
    def active_session(self) -> ActiveSession | None:
        return self.state.active_session

    @property
    def is_running(self) -> bool:
        """Whether the countdown is armed and expects ticks."""
        return self.state.phase.is_running

    # -- operations ----------------------------------------------------------

    def start(self, focus_minutes: int, break_minutes: int, tag: str) -> None:
        """Begin a focus phase. Ignored unless the timer is idle."""
        if self.state.phase != IDLE:
            self.logger.debug("start ignored while %s", self.state.phase)
            return
        if focus_minutes <= 0 or break_minutes <= 0:
            raise ValueError("Focus and break durations must be positive minutes")

        self.state.active_session = ActiveSession(
            start_timestamp=self._now(),
            tag=tag,
            focus_minutes=focus_minutes,
            break_minutes=break_minutes,
        )
        self.state.phase = FOCUS
        self.state.remaining_seconds = focus_minutes * 60
        self._emit_state_change()

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self.state.phase.is_running:
            return

        self.state.remaining_seconds = max(0, self.state.remaining_seconds - 1)
        self._emit_tick()

        if self.state.remaining_seconds > 0:
            return

        self._emit_phase_end()
        if self.state.phase == FOCUS:
            session = self.state.active_session
            self._emit_session_end(
                LogEntry(
                    start_timestamp=session.start_timestamp,
                    end_timestamp=self._now(),
                    duration_minutes=session.focus_minutes,
                    tag=session.tag,
                )
            )
            self.state.phase = BREAK
            self.state.remaining_seconds = session.break_minutes * 60
            self._emit_state_change()
        else:
            # Full cycle done; break time is never logged.
            self.stop(log=False)

    def pause_resume(self) -> None:
        """Suspend a running phase, or resume a suspended one."""
        phase = self.state.phase
        if phase.is_running:
            self.state.phase = Phase.paused(phase)
            self._emit_state_change()
        elif phase.is_paused:
            self.state.phase = phase.resumed()
            self._emit_state_change()

    def stop(self, log: bool = True) -> None:
        """
        End the cycle and return to idle.

        Stopping during focus with ``log`` set publishes a partial entry whose
        duration is the wall-clock minutes since the session started. A
        paused phase logs nothing, and break time is never logged.
        """
        phase = self.state.phase
        if phase == IDLE:
            return

        session = self.state.active_session
        if phase == FOCUS and log and session is not None:
            end = self._now()
            self._emit_session_end(
                LogEntry(
                    start_timestamp=session.start_timestamp,
                    end_timestamp=end,
                    duration_minutes=elapsed_minutes(session.start_timestamp, end),
                    tag=session.tag,
                )
            )

        self.state.phase = IDLE
        self.state.remaining_seconds = 0
        self.state.active_session = None
        self._emit_state_change()
