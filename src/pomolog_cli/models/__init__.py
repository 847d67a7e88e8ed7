"""Data models for PomoLog CLI."""

from .config_models import AppConfig, Preset

__all__ = ["AppConfig", "Preset"]
