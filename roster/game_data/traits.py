"""Trait catalog: displayable and hidden trait ids plus mutually exclusive pairs."""

from typing import Dict, Iterable, Optional, Tuple

DISPLAYABLE_TRAITS: Tuple[str, ...] = (
    "ALCOHOLIC",
    "ARROGANT",
    "CALM",
    "CHASTE",
    "CHEERY",
    "DEMANDING",
    "DISCIPLINED",
    "HARDWORKING",
    "HEARTBREAKER",
    "HOTHEADED",
    "INDIFFERENT",
    "JUNKIE",
    "LAZY",
    "LEADER",
    "LUDOMANIAC",
    "MELANCHOLIC",
    "MISOGYNIST",
    "MODEST",
    "OPEN_MINDED",
    "PERFECTIONIST",
    "RACIST",
    "SIMPLE",
    "TEAM_PLAYER",
    "UNDISCIPLINED",
    "UNWANTED_ACTOR",
    "XENOPHOBE",
)

HIDDEN_TRAITS: Tuple[str, ...] = (
    "IMMORTAL",
    "IMAGE_SOPHISTIC",
    "IMAGE_VIVID",
    "MAIN_CHARACTER",
    "STERILE",
    "SUPER_IMMORTAL",
    "UNTOUCHABLE",
)

_CONFLICT_PAIRS = (
    ("HARDWORKING", "LAZY"),
    ("DISCIPLINED", "UNDISCIPLINED"),
    ("PERFECTIONIST", "INDIFFERENT"),
    ("HOTHEADED", "CALM"),
    ("DEMANDING", "MODEST"),
    ("ARROGANT", "SIMPLE"),
    ("HEARTBREAKER", "CHASTE"),
    ("CHEERY", "MELANCHOLIC"),
)

TRAIT_CONFLICTS: Dict[str, str] = {}
for _a, _b in _CONFLICT_PAIRS:
    TRAIT_CONFLICTS[_a] = _b
    TRAIT_CONFLICTS[_b] = _a


def is_displayable(trait: str) -> bool:
    return trait in DISPLAYABLE_TRAITS


def is_hidden(trait: str) -> bool:
    return trait in HIDDEN_TRAITS


def conflicting_trait(trait: str) -> Optional[str]:
    return TRAIT_CONFLICTS.get(trait)


def can_add_trait(trait: str, current: Optional[Iterable[str]]) -> bool:
    """False when ``trait`` is already present or its opposite is.

    Advisory only: ``updater.add_trait`` does not consult it.
    """
    present = set(current or ())
    if trait in present:
        return False
    conflict = TRAIT_CONFLICTS.get(trait)
    return not (conflict and conflict in present)
