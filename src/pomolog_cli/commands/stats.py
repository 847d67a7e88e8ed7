"""Statistics and history commands for the session log."""

from datetime import datetime

import typer
from rich.table import Table

from pomolog_cli.models.focus.analytics import StatsAggregator
from pomolog_cli.models.focus.ui import render_period
from pomolog_cli.utils.ui.console import get_console
from pomolog_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .focus import get_log_store

console = get_console()


@command_wrapper
def show_stats(
    output: str = typer.Option(
        "pretty", "--output", "-o", help="Output format (pretty, json, yaml)"
    ),
) -> None:
    """Show focus time for today, this week and all time."""
    stats = StatsAggregator(get_log_store()).compute_stats(datetime.now())

    if output in ("json", "yaml"):
        format_output(stats.to_dict(), output)
        return

    console.print("\n[bold cyan]🍅 PomoLog Statistics[/bold cyan]")
    render_period(console, "Today", stats.today)
    render_period(console, "This Week", stats.week)
    render_period(console, "All Time", stats.all_time)
    console.print()


@command_wrapper
def list_tags(
    output: str = typer.Option(
        "pretty", "--output", "-o", help="Output format (pretty, json, yaml)"
    ),
) -> None:
    """List every tag used in the session log."""
    tags = sorted(get_log_store().get_all_tags(), key=str.casefold)

    if output in ("json", "yaml"):
        format_output(tags, output)
        return

    if not tags:
        console.print("[yellow]No tags logged yet[/yellow]")
        return
    for tag in tags:
        console.print(tag)


@command_wrapper
def show_log(
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Number of sessions to show"),
    output: str = typer.Option(
        "pretty", "--output", "-o", help="Output format (pretty, json, yaml)"
    ),
) -> None:
    """Show the log file location and the most recent sessions."""
    store = get_log_store()
    entries = store.get_recent_entries(limit)

    if output in ("json", "yaml"):
        format_output([entry.to_dict() for entry in entries], output)
        return

    console.print(f"[dim]Log file: {store.store.path}[/dim]")
    if not entries:
        console.print("[yellow]No sessions logged yet[/yellow]")
        return

    table = Table(title=f"Recent Sessions ({len(entries)})", show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Minutes", justify="right")
    table.add_column("Tag")
    for entry in entries:
        table.add_row(
            entry.date.isoformat(),
            entry.start_timestamp.strftime("%H:%M:%S"),
            entry.end_timestamp.strftime("%H:%M:%S"),
            str(entry.duration_minutes),
            entry.tag,
        )
    console.print(table)
