"""Timer presets: built-in focus/break pairs plus user-defined ones."""

from collections.abc import Callable

from pomolog_cli.models.config_models import AppConfig, Preset, default_presets

DEFAULT_PRESETS: list[Preset] = default_presets()


class PresetManager:
    """Manage focus/break presets."""

    def __init__(self, config: AppConfig, save_config: Callable[[], None]):
        """Initialize preset manager.

        Args:
            config: Current application configuration.
            save_config: Callable that persists the configuration.
        """
        self.config = config
        self.save_config = save_config

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().casefold()

    def is_builtin(self, name: str) -> bool:
        return any(self._key(p.name) == self._key(name) for p in DEFAULT_PRESETS)

    def get_presets(self) -> list[Preset]:
        """Built-in presets followed by custom ones; custom wins on a name clash."""
        custom = {self._key(p.name): p for p in self.config.custom_presets}
        presets = [custom.pop(self._key(p.name), p) for p in DEFAULT_PRESETS]
        return presets + list(custom.values())

    def get_preset(self, name: str) -> Preset | None:
        """Look up a preset by name, ignoring case."""
        for preset in self.get_presets():
            if self._key(preset.name) == self._key(name):
                return preset
        return None

    def get_default(self) -> Preset:
        """The configured default preset, falling back to the first built-in."""
        return self.get_preset(self.config.default_preset) or DEFAULT_PRESETS[0]

    def add_preset(self, name: str, focus_minutes: int, break_minutes: int) -> Preset:
        """Create or replace a custom preset."""
        preset = Preset(
            name=name, focus_minutes=focus_minutes, break_minutes=break_minutes
        )
        self.config.custom_presets = [
            p for p in self.config.custom_presets if self._key(p.name) != self._key(name)
        ] + [preset]
        self.save_config()
        return preset

    def remove_preset(self, name: str) -> bool:
        """Delete a custom preset (built-in ones can't be deleted)."""
        if self.is_builtin(name):
            return False

        remaining = [
            p for p in self.config.custom_presets if self._key(p.name) != self._key(name)
        ]
        if len(remaining) == len(self.config.custom_presets):
            return False

        self.config.custom_presets = remaining
        self.save_config()
        return True
