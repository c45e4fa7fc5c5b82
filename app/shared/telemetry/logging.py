"""Logging setup for rfpflow: one stdout handler, module loggers via get_logger()."""

import logging
import sys

from app.core.config import get_settings

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Workflow modules log denials and transitions at INFO; these are noisy below WARNING.
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg")


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once per process.

    Level comes from the argument, then settings.log_level, then DEBUG/INFO
    by settings.debug. SQL statement logging stays off unless database_echo.
    """
    settings = get_settings()
    name = (level or settings.log_level or ("DEBUG" if settings.debug else "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    if not settings.database_echo:
        for quiet in _QUIET_LOGGERS:
            logging.getLogger(quiet).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(name)
