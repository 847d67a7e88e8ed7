"""Main entry point for PomoLog CLI."""

import typer
from rich.console import Console

from pomolog_cli import __version__
from pomolog_cli.commands import config, focus, presets, stats
from pomolog_cli.utils.logger import set_log_level

app = typer.Typer(
    name="pomolog",
    help="Focus timer that keeps a Markdown log of your work sessions",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Write debug details to the log file"
    ),
) -> None:
    """PomoLog - focus/break timer with a plain-text session log."""
    set_log_level("DEBUG" if verbose else "INFO")


# Add subcommands
app.add_typer(presets.app, name="presets", help="Manage focus/break presets")
app.add_typer(config.app, name="config", help="Configuration management")

# Add top-level commands
app.command("start")(focus.start_focus)
app.command("stats")(stats.show_stats)
app.command("tags")(stats.list_tags)
app.command("log")(stats.show_log)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]PomoLog CLI[/bold] version [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
