"""Shared helpers for roster: data directory resolution and lenient numeric coercion."""

import logging
import math
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def get_roster_home() -> Path:
    """Return the roster data directory.

    ``ROSTER_DATA_DIR`` wins when set; otherwise ``~/.roster``.
    The directory is not created here.
    """
    override = os.environ.get("ROSTER_DATA_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".roster"


def to_float(value: Any, default: float = 0.0) -> float:
    """Coerce a decimal that may arrive as text or number.

    Malformed or non-finite input returns ``default`` instead of raising;
    partial and legacy records are expected.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            logger.debug("Unparseable decimal %r, using %s", value, default)
            return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def format_decimal(value: float) -> str:
    """Format a float as short decimal text (``1.0 -> "1"``, ``0.45 -> "0.45"``)."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    if text == "-0":
        text = "0"
    return text
