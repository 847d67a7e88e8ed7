"""Preset management commands."""

import typer
from rich.table import Table

from pomolog_cli.utils.exit_codes import ERROR_NOT_FOUND
from pomolog_cli.utils.ui.console import get_console
from pomolog_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper
from .focus import _get_preset_manager

app = typer.Typer(help="Manage focus/break presets")
console = get_console()


@app.command("list")
@command_wrapper
def list_presets(
    output: str = typer.Option(
        "pretty", "--output", "-o", help="Output format (pretty, json, yaml)"
    ),
) -> None:
    """List built-in and custom presets."""
    manager = _get_preset_manager()
    presets = manager.get_presets()
    default = manager.get_default()

    if output in ("json", "yaml"):
        format_output([p.model_dump() for p in presets], output)
        return

    table = Table(title="Presets", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Focus", justify="right")
    table.add_column("Break", justify="right")
    table.add_column("Type")
    for preset in presets:
        name = preset.name + (" *" if preset == default else "")
        kind = "built-in" if manager.is_builtin(preset.name) else "custom"
        table.add_row(
            name, f"{preset.focus_minutes}m", f"{preset.break_minutes}m", kind
        )
    console.print(table)


@app.command("add")
@command_wrapper
def add_preset(
    name: str = typer.Argument(..., help="Preset name"),
    focus_minutes: int = typer.Option(..., "--focus", "-f", min=1, help="Focus minutes"),
    break_minutes: int = typer.Option(..., "--break", "-b", min=1, help="Break minutes"),
    make_default: bool = typer.Option(
        False, "--default", help="Use this preset when none is given"
    ),
) -> None:
    """Create or replace a custom preset."""
    manager = _get_preset_manager()
    preset = manager.add_preset(name, focus_minutes, break_minutes)
    if make_default:
        manager.config.default_preset = preset.name
        manager.save_config()
    format_success(
        f"Preset '{preset.name}' saved ({preset.focus_minutes}/{preset.break_minutes})"
    )


@app.command("remove")
@command_wrapper
def remove_preset(
    name: str = typer.Argument(..., help="Preset name"),
) -> None:
    """Delete a custom preset."""
    manager = _get_preset_manager()
    if manager.is_builtin(name):
        raise AppError(f"Built-in preset '{name}' cannot be removed")
    if not manager.remove_preset(name):
        raise AppError(f"Preset '{name}' not found", exit_code=ERROR_NOT_FOUND)
    format_success(f"Preset '{name}' removed")
