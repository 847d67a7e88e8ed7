"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from pomolog_cli.models.focus.scheduler import SchedulerListener


# ---------------------------------------------------------------------------
# Logger isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Point the application log at tmp_path and reset the singleton."""
    import pomolog_cli.utils.logger as logger_mod

    log_dir = tmp_path / "logs"
    logger_mod._root_logger = None
    logging.getLogger("pomolog_cli").handlers.clear()
    with patch("pomolog_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir
    for handler in logging.getLogger("pomolog_cli").handlers:
        handler.close()
    logging.getLogger("pomolog_cli").handlers.clear()
    logger_mod._root_logger = None


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from pomolog_cli.services.config_service import ConfigService, get_config_service

    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")
    get_config_service.cache_clear()
    with patch("pomolog_cli.services.config_service.user_config_dir", return_value=config_dir):
        with patch("pomolog_cli.services.config_service.user_data_dir", return_value=data_dir):
            svc = ConfigService()
            svc.load_config()
            yield svc
    get_config_service.cache_clear()


@pytest.fixture()
def patch_config_service(tmp_config):
    """Make every command module see the tmp-backed ConfigService."""
    with patch("pomolog_cli.commands.focus.get_config_service", return_value=tmp_config):
        with patch("pomolog_cli.commands.config.get_config_service", return_value=tmp_config):
            yield tmp_config


# ---------------------------------------------------------------------------
# Scheduler helpers
# ---------------------------------------------------------------------------


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 5, 2, 9, 0, 0)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class RecordingListener(SchedulerListener):
    """Remembers every event it receives, in order."""

    def __init__(self):
        self.events: list[tuple] = []

    def on_state_change(self, phase, remaining_seconds):
        self.events.append(("state", phase, remaining_seconds))

    def on_tick(self, remaining_seconds):
        self.events.append(("tick", remaining_seconds))

    def on_phase_end(self):
        self.events.append(("phase_end",))

    def on_session_end(self, entry):
        self.events.append(("session_end", entry))

    @property
    def entries(self):
        return [e[1] for e in self.events if e[0] == "session_end"]

    def names(self, skip_ticks: bool = True) -> list[str]:
        return [e[0] for e in self.events if not (skip_ticks and e[0] == "tick")]


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def recorder() -> RecordingListener:
    return RecordingListener()
