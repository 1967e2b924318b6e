"""Logging setup for roster.

Two sinks:
- ``local-<date>.log``: the ``roster`` logger tree (module loggers)
- ``edit-events-<date>.log``: one line per load/edit/persist event,
  ``<event> | category=<category> | key=value, ...``

Both live under ``<data dir>/logs`` (see ``roster.utils.get_roster_home``).
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from roster.utils import get_roster_home

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _log_dir() -> Path:
    path = get_roster_home() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def _today() -> str:
    return datetime.now().strftime("%Y-%m-%d")


def setup_roster_logging(level: str = "INFO") -> logging.Logger:
    """Configure the ``roster`` logger.

    Adds a file handler (once) and, at DEBUG, a console handler.
    Unknown level names fall back to INFO.

    Args:
        level: Level name, case-insensitive.

    Returns:
        The configured ``roster`` logger.
    """
    level_name = (level or "INFO").upper()
    if level_name not in _VALID_LEVELS:
        level_name = "INFO"
    numeric_level = getattr(logging, level_name)

    logger = logging.getLogger("roster")
    logger.setLevel(numeric_level)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        file_handler = logging.FileHandler(_log_dir() / f"local-{_today()}.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in logger.handlers
    )
    if numeric_level == logging.DEBUG and not has_console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    return logger


def log_edit_event(event_type: str, details: str, category: str = "default") -> None:
    """Append one line to the edit-events log."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    line = f"{timestamp} | {event_type} | category={category} | {details}\n"
    with open(_log_dir() / f"edit-events-{_today()}.log", "a", encoding="utf-8") as f:
        f.write(line)


def log_load(category: str, count: int, current_date: Optional[str] = None) -> None:
    log_edit_event("load", f"count={count}, current_date={current_date}", category=category)


def log_edit(category: str, person_id: Any, field: str, value: Any) -> None:
    log_edit_event("edit", f"id={person_id}, field={field}, value={value}", category=category)


def log_persist(category: str, key: str, ok: bool, error: Optional[str] = None) -> None:
    details = f"key={key}, ok={ok}"
    if error:
        details += f", error={error[:80]}"
    log_edit_event("persist", details, category=category)
