"""Configuration models for PomoLog CLI."""

from __future__ import annotations

from pydantic import BaseModel, Field, PositiveInt, field_validator


class Preset(BaseModel):
    """Named pair of focus and break durations, in minutes."""

    model_config = {"frozen": True}

    name: str
    focus_minutes: PositiveInt
    break_minutes: PositiveInt

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Preset name cannot be empty")
        return v


def default_presets() -> list[Preset]:
    return [
        Preset(name="Default (25/5)", focus_minutes=25, break_minutes=5),
        Preset(name="Study (50/10)", focus_minutes=50, break_minutes=10),
    ]


class AppConfig(BaseModel):
    """Main configuration."""

    log_file_path: str | None = Field(default=None)
    custom_presets: list[Preset] = Field(default_factory=list)
    default_preset: str = Field(default="Default (25/5)")
    focus_color: str = Field(default="red")
    break_color: str = Field(default="cyan")
    enable_completion_sound: bool = Field(default=True)
    show_progress: bool = Field(default=True)
