"""Genre catalog.

Genres are stored as tags in a person's tag store. A genre is
"established" once its value reaches ``ESTABLISHED_THRESHOLD``; at most
``MAX_ESTABLISHED`` genres may be established at once.
"""

from typing import Tuple

GENRES: Tuple[str, ...] = (
    "ACTION",
    "DRAMA",
    "HISTORICAL",
    "THRILLER",
    "ROMANCE",
    "DETECTIVE",
    "COMEDY",
    "ADVENTURE",
    "HORROR",
    "SCIENCE_FICTION",
)

ESTABLISHED_THRESHOLD = 12.0
MAX_ESTABLISHED = 3

# Lower bounds of genre levels 3 and 2 (level 4 is ESTABLISHED_THRESHOLD).
LEVEL_THRESHOLDS = (8.0, 4.0)


def is_genre(value: str) -> bool:
    return value in GENRES


def level_for(value: float) -> int:
    """Genre level 0-4 for a raw tag value."""
    if value >= ESTABLISHED_THRESHOLD:
        return 4
    if value >= LEVEL_THRESHOLDS[0]:
        return 3
    if value >= LEVEL_THRESHOLDS[1]:
        return 2
    if value > 0:
        return 1
    return 0
