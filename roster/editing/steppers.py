"""Discrete value stepping for skill, limit and status values.

``snap_up``/``snap_down`` work in hundredths: ``grid_size=10`` moves a
0..1 value in 0.1 steps, landing on the next grid line first when the
value sits between lines.
"""

import math
from typing import Sequence, Tuple


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def snap_up(value: float, grid_size: int, maximum: float) -> float:
    current = round(value * 100)
    if current % grid_size == 0:
        return min((current + grid_size) / 100, maximum)
    return min(math.ceil(current / grid_size) * grid_size / 100, maximum)


def snap_down(value: float, grid_size: int, minimum: float = 0) -> float:
    current = round(value * 100)
    if current % grid_size == 0:
        return max((current - grid_size) / 100, minimum)
    return max(math.floor(current / grid_size) * grid_size / 100, minimum)


def find_next_level(current: float, levels: Sequence[float]) -> float:
    """First level above ``current``; ``current`` itself when at the top."""
    for level in levels:
        if level > current:
            return level
    return current


def find_prev_level(current: float, levels: Sequence[float]) -> float:
    """Last level below ``current``; 0 when at the bottom."""
    for level in reversed(levels):
        if level < current:
            return level
    return 0


def format_scaled(value: float, scale: float) -> str:
    """``0.45, 10 -> "4.5"``; whole results drop the decimal (``0.4, 10 -> "4"``)."""
    scaled = value * scale
    if scaled % 1 == 0:
        return f"{scaled:.0f}"
    return f"{scaled:.1f}"


def skill_up(skill: float, limit: float) -> float:
    """Next 0.1 step of a skill, capped by the person's limit."""
    return snap_up(skill, 10, limit)


def skill_down(skill: float) -> float:
    return snap_down(skill, 10)


def limit_up(limit: float) -> float:
    return snap_up(limit, 10, 1)


def limit_down(limit: float, skill: float) -> Tuple[float, float]:
    """Lower the limit one step; the skill follows when it would exceed it.

    Returns:
        ``(new_limit, new_skill)``.
    """
    new_limit = snap_down(limit, 10)
    return new_limit, min(skill, new_limit)
