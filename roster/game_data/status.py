"""Public-image status ranks for the ART and COM tags."""

from typing import Dict, Optional, Tuple

ART = "ART"
COM = "COM"

STATUS_LEVELS: Tuple[float, ...] = (0.01, 0.15, 0.30, 0.70, 1.00)

ACTOR_LABELS: Dict[str, Tuple[str, ...]] = {
    ART: ("PROMISING TALENT", "COMMANDING PRESENCE", "TRUE ARTIST", "ICON"),
    COM: ("RISING STAR", "STAR", "SUPERSTAR", "LEGEND"),
}

DIRECTOR_LABELS: Dict[str, Tuple[str, ...]] = {
    ART: ("FRESH PERSPECTIVE", "DECISIVE TALENT", "VISIONARY", "GENIUS"),
    COM: ("FAN FAVORITE", "SENSATION", "PHENOMENON", "HOLLYWOOD GIANT"),
}


def rank(value: float) -> int:
    """Rank 0-4. Rank 4 requires exactly 1.0."""
    if value == 1.0:
        return 4
    if value >= 0.70:
        return 3
    if value >= 0.30:
        return 2
    if value >= 0.15:
        return 1
    return 0


def label(status_type: str, profession: str, value: float) -> Optional[str]:
    """Rank title for an Actor or Director; ``None`` at rank 0."""
    current = rank(value)
    if current == 0:
        return None
    labels = ACTOR_LABELS if profession == "Actor" else DIRECTOR_LABELS
    return labels[status_type][current - 1]
