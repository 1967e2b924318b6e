"""Ranges of the scalar stats and the adjuster presets that edit them."""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class StatRange:
    id: str
    label: str
    min: float
    max: float

    def clamp(self, value: float) -> float:
        return max(self.min, min(self.max, value))


MOOD = StatRange("mood", "Happiness", 0.0, 1.0)
ATTITUDE = StatRange("attitude", "Loyalty", 0.0, 1.0)
SELF_ESTEEM = StatRange("selfEsteem", "Self-Esteem", -0.99, 2.0)

STAT_RANGES: Dict[str, StatRange] = {s.id: s for s in (MOOD, ATTITUDE, SELF_ESTEEM)}


def get(stat_id: str) -> Optional[StatRange]:
    return STAT_RANGES.get(stat_id)


# Adjusters display stats multiplied by 100.
DISPLAY_SCALE = 100

AGE_MIN = 18
AGE_MAX = 100
