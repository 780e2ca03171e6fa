"""Logging setup for the filter service. Records carry structured fields via `extra`."""

import logging
import sys
from typing import Any

from app.config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def configure_logging(level_name: str | None = None) -> None:
    """
    Route all records to stdout at settings.log_level (or level_name when given).
    Replaces existing root handlers, so repeated calls do not duplicate output.
    """
    name = (level_name or get_settings().log_level).upper()
    level = getattr(logging, name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)


def log_extra(extra: dict[str, Any]) -> dict[str, Any]:
    """Keyword arguments for logger.info(msg, **log_extra({...})) carrying structured fields."""
    return {"extra": extra}
