"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "pomolog_cli"
_LOG_FILE = "pomolog.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_root_logger: logging.Logger | None = None


def _init_root_logger() -> logging.Logger:
    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the application logger, or a child logger for *component*.

    The file handler is attached once, on first call; child loggers
    (``pomolog_cli.scheduler``, ``pomolog_cli.history`` ...) propagate to it.
    """
    global _root_logger
    if _root_logger is None:
        _root_logger = _init_root_logger()

    if component:
        return _root_logger.getChild(component)
    return _root_logger


def set_log_level(level: int | str) -> None:
    """Change the threshold of the application logger."""
    get_logger().setLevel(level)
