"""Focus timer command: run a focus/break cycle and log it."""

import typer

from pomolog_cli.models.focus.document import clean_tag
from pomolog_cli.models.focus.history import SessionLogStore
from pomolog_cli.models.focus.listeners import CompletionBell, SessionLogWriter
from pomolog_cli.models.focus.scheduler import PhaseScheduler
from pomolog_cli.models.focus.templates import PresetManager
from pomolog_cli.models.focus.ui import TimerDisplay, show_session_summary
from pomolog_cli.services.config_service import get_config_service
from pomolog_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_IO, ERROR_NOT_FOUND
from pomolog_cli.utils.ui.console import get_console

from .decorators import AppError, command_wrapper

console = get_console()


def get_log_store() -> SessionLogStore:
    """SessionLogStore for the configured log file."""
    return SessionLogStore(get_config_service().get_log_path())


def _get_preset_manager() -> PresetManager:
    """Create a PresetManager with injected config dependencies."""
    svc = get_config_service()
    return PresetManager(config=svc.config, save_config=svc.save_config)


def complete_tag(incomplete: str) -> list[str]:
    """Shell completion for tags already present in the log."""
    tags = get_log_store().get_all_tags()
    return sorted(tag for tag in tags if tag.startswith(incomplete))


@command_wrapper
def start_focus(
    tag: str = typer.Argument(
        ..., help="What you are working on", autocompletion=complete_tag
    ),
    preset: str | None = typer.Option(
        None, "--preset", "-p", help="Preset name (see 'pomolog presets list')"
    ),
    focus_minutes: int | None = typer.Option(
        None, "--focus", "-f", min=1, help="Focus minutes (overrides the preset)"
    ),
    break_minutes: int | None = typer.Option(
        None, "--break", "-b", min=1, help="Break minutes (overrides the preset)"
    ),
) -> None:
    """Start a focus session followed by a break."""
    tag = clean_tag(tag)
    if not tag:
        raise AppError("Tag cannot be empty", exit_code=ERROR_INVALID_ARGS)

    manager = _get_preset_manager()
    if preset:
        selected = manager.get_preset(preset)
        if selected is None:
            raise AppError(f"Preset '{preset}' not found", exit_code=ERROR_NOT_FOUND)
    else:
        selected = manager.get_default()

    focus_minutes = focus_minutes or selected.focus_minutes
    break_minutes = break_minutes or selected.break_minutes

    config = get_config_service().config
    scheduler = PhaseScheduler()
    writer = SessionLogWriter(get_log_store())
    scheduler.subscribe(writer)
    if config.enable_completion_sound:
        scheduler.subscribe(CompletionBell(console))

    console.print(
        f"\n[bold green]🍅 {focus_minutes} min focus / {break_minutes} min break[/bold green]"
    )
    console.print(f"Tag: {tag}")
    console.print("\nStarting fullscreen timer...\n")

    scheduler.start(focus_minutes, break_minutes, tag)
    outcome = TimerDisplay(console, config).run_timer(scheduler)

    show_session_summary(writer.logged, outcome, console)
    if writer.failed:
        raise typer.Exit(code=ERROR_IO)
