"""Unit tests for models/focus/ui.py.

Tests TimerDisplay layout creation, the run_timer control loop (with a
scripted keyboard and a fake monotonic clock), and the summary helpers.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from io import StringIO

import pytest
from rich.console import Console
from rich.layout import Layout
from rich.text import Text

from pomolog_cli.models.config_models import AppConfig
from pomolog_cli.models.focus.analytics import PeriodStats
from pomolog_cli.models.focus.scheduler import PhaseScheduler
from pomolog_cli.models.focus.state import BREAK, FOCUS, IDLE, LogEntry, Phase
from pomolog_cli.models.focus.ui import (
    TimerDisplay,
    render_period,
    show_session_summary,
    status_line,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _string_console() -> tuple[Console, StringIO]:
    """Return a Console that writes to a StringIO buffer."""
    buf = StringIO()
    con = Console(file=buf, force_terminal=False, no_color=True, width=100, height=25)
    return con, buf


class ScriptedKeyboard:
    """Hands out a fixed sequence of keys, then nothing."""

    def __init__(self, keys=()):
        self.keys = list(keys)
        self.stopped = False

    def get_key(self):
        if not self.keys:
            return None
        key = self.keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key

    def stop(self):
        self.stopped = True


class SteppingClock:
    """Monotonic clock that moves forward only when the loop sleeps."""

    def __init__(self, step: float = 1.0):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        return self.now

    def sleep(self, _seconds: float) -> None:
        self.now += self.step


def _text_plains(group) -> list[str]:
    return [r.plain for r in group.renderables if isinstance(r, Text)]


@pytest.fixture()
def scheduler(clock, recorder) -> PhaseScheduler:
    s = PhaseScheduler(now=clock)
    s.subscribe(recorder)
    return s


# ===========================================================================
# status_line
# ===========================================================================


class TestStatusLine:
    def test_idle(self):
        assert status_line(IDLE, 0) == "🍅 PomoLog"

    def test_focus(self):
        assert status_line(FOCUS, 1499) == "🍅 24:59"

    def test_break(self):
        assert status_line(BREAK, 300) == "☕ 05:00"

    def test_paused_uses_pause_icon(self):
        assert status_line(Phase.paused(FOCUS), 61).endswith("01:01")
        assert status_line(Phase.paused(FOCUS), 61).startswith("⏸")


# ===========================================================================
# TimerDisplay layout
# ===========================================================================


class TestCreateLayout:
    def test_returns_layout_with_sections(self, scheduler):
        scheduler.start(25, 5, "writing")
        layout = TimerDisplay().create_layout(scheduler)

        assert isinstance(layout, Layout)
        for name in ("header", "body", "footer"):
            assert layout[name] is not None

    def test_renders_phase_tag_and_clock(self, scheduler):
        con, buf = _string_console()
        scheduler.start(25, 5, "writing")

        con.print(TimerDisplay(console=con).create_layout(scheduler))

        output = buf.getvalue()
        assert "FOCUS" in output
        assert "writing" in output
        assert "25:00" in output

    def test_body_shows_progress(self, scheduler):
        scheduler.start(1, 1, "writing")
        for _ in range(30):
            scheduler.tick()

        plains = _text_plains(TimerDisplay()._create_body_content(scheduler))
        assert "00:30" in plains
        assert any(p.endswith("50%") for p in plains)

    def test_break_progress_uses_break_length(self, scheduler):
        scheduler.start(1, 2, "writing")
        for _ in range(60):
            scheduler.tick()
        assert scheduler.phase == BREAK

        plains = _text_plains(TimerDisplay()._create_body_content(scheduler))
        assert "02:00" in plains
        assert any(p.endswith("0%") for p in plains)

    def test_progress_can_be_disabled(self, scheduler):
        scheduler.start(25, 5, "writing")
        display = TimerDisplay(config=AppConfig(show_progress=False))

        plains = _text_plains(display._create_body_content(scheduler))
        assert not any("%" in p for p in plains)

    def test_long_tag_is_truncated(self, scheduler):
        scheduler.start(25, 5, "x" * 80)
        plains = _text_plains(TimerDisplay()._create_body_content(scheduler))
        assert "x" * 50 in plains

    def test_phase_colors_follow_config(self):
        display = TimerDisplay(config=AppConfig(focus_color="magenta", break_color="blue"))
        assert display._phase_color(FOCUS) == "magenta"
        assert display._phase_color(BREAK) == "blue"
        assert display._phase_color(Phase.paused(FOCUS)) == "yellow"


class TestFooter:
    def test_running_shows_pause_hint(self):
        footer = TimerDisplay()._create_footer_text(FOCUS)
        assert "pause" in footer.plain
        assert "'s'" in footer.plain
        assert "'q'" in footer.plain

    def test_paused_shows_resume_hint(self):
        footer = TimerDisplay()._create_footer_text(Phase.paused(BREAK))
        assert "resume" in footer.plain


# ===========================================================================
# TimerDisplay.run_timer
# ===========================================================================


class TestRunTimer:
    def _run(self, scheduler, keys=()):
        con, _ = _string_console()
        keyboard = ScriptedKeyboard(keys)
        ticker = SteppingClock()
        outcome = TimerDisplay(console=con).run_timer(
            scheduler, keyboard=keyboard, clock=ticker, sleep=ticker.sleep
        )
        return outcome, keyboard

    def test_full_cycle_completes(self, scheduler, recorder):
        scheduler.start(1, 1, "writing")

        outcome, keyboard = self._run(scheduler)

        assert outcome == "completed"
        assert scheduler.phase == IDLE
        assert [e.duration_minutes for e in recorder.entries] == [1]
        assert keyboard.stopped

    def test_one_tick_per_second(self, scheduler, recorder):
        scheduler.start(1, 1, "writing")
        self._run(scheduler)

        ticks = [e for e in recorder.events if e[0] == "tick"]
        assert len(ticks) == 120

    def test_stop_key_logs_partial(self, scheduler, recorder, clock):
        scheduler.start(25, 5, "writing")
        clock.advance(10 * 60)

        outcome, _ = self._run(scheduler, ["s"])

        assert outcome == "stopped"
        assert [e.duration_minutes for e in recorder.entries] == [10]
        assert scheduler.phase == IDLE

    def test_quit_key_logs_nothing(self, scheduler, recorder, clock):
        scheduler.start(25, 5, "writing")
        clock.advance(10 * 60)

        outcome, keyboard = self._run(scheduler, ["q"])

        assert outcome == "quit"
        assert recorder.entries == []
        assert keyboard.stopped

    def test_pause_stops_ticks(self, scheduler, recorder):
        scheduler.start(25, 5, "writing")

        outcome, _ = self._run(scheduler, ["p", None, None, None, "s"])

        assert outcome == "stopped"
        assert not any(e[0] == "tick" for e in recorder.events)
        assert recorder.entries == []

    def test_resume_restarts_ticks(self, scheduler, recorder):
        scheduler.start(25, 5, "writing")

        self._run(scheduler, ["p", None, "p", None, None, None, "s"])

        ticks = [e for e in recorder.events if e[0] == "tick"]
        assert 1 <= len(ticks) <= 3

    def test_ctrl_c_logs_partial(self, scheduler, recorder, clock):
        scheduler.start(25, 5, "writing")
        clock.advance(5 * 60)

        outcome, keyboard = self._run(scheduler, [KeyboardInterrupt()])

        assert outcome == "interrupted"
        assert [e.duration_minutes for e in recorder.entries] == [5]
        assert keyboard.stopped


# ===========================================================================
# Summary helpers
# ===========================================================================


class TestShowSessionSummary:
    def _entry(self) -> LogEntry:
        start = datetime(2024, 5, 2, 9, 0)
        return LogEntry(start, start + timedelta(minutes=25), 25, "writing")

    def test_completed_lists_entries(self):
        con, buf = _string_console()
        show_session_summary([self._entry()], "completed", con)

        output = buf.getvalue()
        assert "complete" in output
        assert "09:00" in output
        assert "25 min" in output
        assert "writing" in output

    def test_quit_mentions_not_logged(self):
        con, buf = _string_console()
        show_session_summary([], "quit", con)

        output = buf.getvalue()
        assert "not logged" in output
        assert "Nothing was logged." in output

    def test_stopped(self):
        con, buf = _string_console()
        show_session_summary([self._entry()], "stopped", con)
        assert "Session stopped" in buf.getvalue()


class TestRenderPeriod:
    def test_empty_period(self):
        con, buf = _string_console()
        render_period(con, "Today", PeriodStats())

        output = buf.getvalue()
        assert "Today" in output
        assert "No sessions logged for this period." in output

    def test_totals_and_tags(self):
        con, buf = _string_console()
        period = PeriodStats()
        period.add("writing", 30)
        period.add("code", 45)

        render_period(con, "Today", period)

        output = buf.getvalue()
        assert "Total focus time: 75 minutes (1.2 hours)" in output
        assert output.index("code: 45 minutes") < output.index("writing: 30 minutes")
