"""Full-screen timer UI for focus mode."""

import time
from collections.abc import Callable

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from pomolog_cli.models.config_models import AppConfig
from pomolog_cli.utils.ui.formatters import format_clock, render_progress_bar

from .analytics import PeriodStats
from .scheduler import PhaseScheduler
from .state import LogEntry, Phase, PhaseKind

PHASE_ICONS = {
    PhaseKind.FOCUS: "🍅",
    PhaseKind.BREAK: "☕",
    PhaseKind.PAUSED: "⏸️ ",
    PhaseKind.IDLE: "✓",
}

PHASE_TITLES = {
    PhaseKind.FOCUS: "FOCUS",
    PhaseKind.BREAK: "BREAK",
    PhaseKind.PAUSED: "PAUSED",
    PhaseKind.IDLE: "DONE",
}


def status_line(phase: Phase, remaining_seconds: int) -> str:
    """Compact one-line status for the terminal title, e.g. ``🍅 24:59``."""
    if phase.kind == PhaseKind.IDLE:
        return "🍅 PomoLog"
    return f"{PHASE_ICONS[phase.kind]} {format_clock(remaining_seconds)}"


class TimerDisplay:
    """Renders a PhaseScheduler and feeds it one tick per second."""

    def __init__(self, console: Console | None = None, config: AppConfig | None = None):
        self.console = console or Console()
        self.config = config or AppConfig()

    def _phase_color(self, phase: Phase) -> str:
        if phase.kind == PhaseKind.PAUSED:
            return "yellow"
        if phase.kind == PhaseKind.BREAK:
            return self.config.break_color
        if phase.kind == PhaseKind.FOCUS:
            return self.config.focus_color
        return "green"

    def create_layout(self, scheduler: PhaseScheduler) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        phase = scheduler.phase
        color = self._phase_color(phase)
        header_text = Text(
            f"{PHASE_ICONS[phase.kind]}  {PHASE_TITLES[phase.kind]}",
            style=f"bold {color}",
            justify="center",
        )
        layout["header"].update(Align.center(header_text, vertical="middle"))
        layout["body"].update(
            Align.center(self._create_body_content(scheduler), vertical="middle")
        )
        layout["footer"].update(
            Align.center(self._create_footer_text(phase), vertical="middle")
        )
        return layout

    def _create_body_content(self, scheduler: PhaseScheduler) -> Group:
        components = []
        session = scheduler.active_session
        phase = scheduler.phase
        color = self._phase_color(phase)

        if session is not None:
            components.append(Text(session.tag[:50], style="bold white", justify="center"))
            components.append(Text(""))

        remaining = scheduler.remaining_seconds
        components.append(
            Text(format_clock(remaining), style=f"bold {color}", justify="center")
        )

        if self.config.show_progress and session is not None:
            running = phase.suspended or phase.kind
            minutes = (
                session.break_minutes
                if running == PhaseKind.BREAK
                else session.focus_minutes
            )
            total = minutes * 60
            elapsed = total - remaining
            pct = min(100, int(elapsed / total * 100)) if total > 0 else 0
            components.append(Text(""))
            components.append(
                Text(
                    f"{render_progress_bar(elapsed, total, width=40)}  {pct}%",
                    style="dim",
                    justify="center",
                )
            )

        return Group(*components)

    def _create_footer_text(self, phase: Phase) -> Text:
        if phase.is_paused:
            hints = (
                "Press 'p' to resume  •  's' to stop (not logged while paused)"
                "  •  'q' to quit"
            )
        else:
            hints = "Press 'p' to pause  •  's' to stop and log  •  'q' to quit"
        return Text(hints, style="dim", justify="center")

    def run_timer(
        self,
        scheduler: PhaseScheduler,
        keyboard=None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> str:
        """
        Drive the scheduler until it returns to idle.

        Acts as the scheduler's clock: one ``tick()`` per elapsed second while
        the countdown is armed, none while paused.

        Returns the final outcome: 'completed', 'stopped', 'quit' or
        'interrupted'.
        """
        if keyboard is None:
            from .keyboard import create_keyboard_handler

            keyboard = create_keyboard_handler()

        next_tick: float | None = None
        try:
            with Live(
                self.create_layout(scheduler),
                console=self.console,
                refresh_per_second=4,
                screen=True,
            ) as live:
                while scheduler.phase.kind != PhaseKind.IDLE:
                    key = keyboard.get_key()
                    if key == "p":
                        scheduler.pause_resume()
                    elif key == "s":
                        scheduler.stop(log=True)
                        return "stopped"
                    elif key == "q":
                        scheduler.stop(log=False)
                        return "quit"

                    now = clock()
                    if not scheduler.is_running:
                        next_tick = None
                    elif next_tick is None:
                        next_tick = now + 1
                    while (
                        next_tick is not None
                        and scheduler.is_running
                        and now >= next_tick
                    ):
                        scheduler.tick()
                        next_tick += 1

                    live.update(self.create_layout(scheduler))
                    self.console.set_window_title(
                        status_line(scheduler.phase, scheduler.remaining_seconds)
                    )
                    sleep(0.25)

                return "completed"

        except KeyboardInterrupt:
            scheduler.stop(log=True)
            return "interrupted"
        finally:
            keyboard.stop()


def show_session_summary(
    entries: list[LogEntry], outcome: str, console: Console | None = None
) -> None:
    """Summarise what was logged once the timer exits."""
    console = console or Console()

    if outcome == "completed":
        title, style = "[bold green]🎉 Focus cycle complete![/bold green]", "green"
    elif outcome == "quit":
        title, style = "[yellow]Timer quit - current session not logged[/yellow]", "yellow"
    else:
        title, style = "[yellow]Session stopped[/yellow]", "yellow"

    lines = [title, ""]
    if entries:
        for entry in entries:
            lines.append(
                f"{entry.start_timestamp.strftime('%H:%M')}  "
                f"{entry.duration_minutes} min  {entry.tag}"
            )
        lines.append("")
        lines.append("Saved to the session log.")
    else:
        lines.append("Nothing was logged.")

    console.print(Panel("\n".join(lines), border_style=style, padding=(1, 2)))


def render_period(console: Console, title: str, period: PeriodStats) -> None:
    """Print one stats period: totals and a per-tag breakdown."""
    console.print(f"\n[bold]{title}[/bold]")
    if period.total_minutes == 0:
        console.print("  No sessions logged for this period.")
        return

    console.print(
        f"  Total focus time: {period.total_minutes} minutes "
        f"({period.total_minutes / 60:.1f} hours)"
    )
    top = max(period.by_tag.values())
    for tag, minutes in period.sorted_tags():
        bar = render_progress_bar(minutes, top)
        console.print(f"  {bar} {tag}: {minutes} minutes")
