"""Studio catalog: the player's studio and the five competitor studios."""

from typing import Any, Dict, Optional, Tuple

PLAYER_STUDIO_ID = "PL"
UNAFFILIATED = "N/A"  # Canonical "no studio" token
_SENTINEL_NONE = "NONE"  # What the save file stores for "no studio"

OPPONENT_STUDIOS: Dict[str, str] = {
    "GB": "Gerstein Brothers",
    "EM": "Evergreen Movies",
    "SU": "Supreme",
    "HE": "Hephaestus",
    "MA": "Marginese",
}

ALL_STUDIO_IDS: Tuple[str, ...] = (PLAYER_STUDIO_ID,) + tuple(OPPONENT_STUDIOS)


def normalize_id(studio_id: Any) -> str:
    """Map a missing, empty or ``NONE`` studio id to ``N/A``."""
    if studio_id is None:
        return UNAFFILIATED
    text = str(studio_id)
    if not text or text == _SENTINEL_NONE:
        return UNAFFILIATED
    return text


def opponent_name(studio_id: Optional[str]) -> Optional[str]:
    if not studio_id:
        return None
    return OPPONENT_STUDIOS.get(studio_id)


def is_valid_id(value: str) -> bool:
    return value in ALL_STUDIO_IDS


def opponent_ids() -> Tuple[str, ...]:
    return tuple(OPPONENT_STUDIOS)
