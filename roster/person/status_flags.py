"""Status bitmask codec.

A person's ``state`` is an integer where each set bit is one independent
condition. Bits are not contiguous and several may be set at once.
"""

import enum
from typing import Dict, Iterable, List, Optional


class StatusFlag(enum.IntFlag):
    HIRED_BY_PLAYER = 2
    FIRED = 4
    DEAD = 16
    HIRED_BY_COMPETITOR = 32
    LOCKED = 64
    IN_HOSPITAL = 128
    KIDNAPPED_BY_PLAYER = 256
    VACATION = 512
    TIRED = 1024
    REQUEST_COOLDOWN = 2048
    OFFENDED = 4096
    THREATENING = 8192
    BEATING = 16384
    KILLING = 32768
    KIDNAPPING = 65536
    IMPRISONED = 131072
    KIDNAPPED_BY_COMPETITOR = 262144
    SPECIAL_VACATION = 524288
    DOING_POLICY_BONUSES = 1048576
    ON_THE_WAR = 2097152
    COMPROMISED_BY_COMPETITOR = 4194304
    SELECTED_FOR_POACHING = 8388608


# Display labels, in bit order.
FLAG_LABELS: Dict[StatusFlag, str] = {
    StatusFlag.HIRED_BY_PLAYER: "Hired by Player",
    StatusFlag.FIRED: "Fired",
    StatusFlag.DEAD: "Dead",
    StatusFlag.HIRED_BY_COMPETITOR: "Hired by Competitor",
    StatusFlag.LOCKED: "Locked",
    StatusFlag.IN_HOSPITAL: "In Hospital",
    StatusFlag.KIDNAPPED_BY_PLAYER: "Kidnapped by Player",
    StatusFlag.VACATION: "Vacation",
    StatusFlag.TIRED: "Tired",
    StatusFlag.REQUEST_COOLDOWN: "Request Cooldown",
    StatusFlag.OFFENDED: "Offended",
    StatusFlag.THREATENING: "Threatening",
    StatusFlag.BEATING: "Beating",
    StatusFlag.KILLING: "Killing",
    StatusFlag.KIDNAPPING: "Kidnapping",
    StatusFlag.IMPRISONED: "Imprisoned",
    StatusFlag.KIDNAPPED_BY_COMPETITOR: "Kidnapped by Competitor",
    StatusFlag.SPECIAL_VACATION: "Special Vacation",
    StatusFlag.DOING_POLICY_BONUSES: "Doing Policy Bonuses",
    StatusFlag.ON_THE_WAR: "On The War",
    StatusFlag.COMPROMISED_BY_COMPETITOR: "Compromised by Competitor",
    StatusFlag.SELECTED_FOR_POACHING: "Selected for Poaching",
}

_LABEL_TO_FLAG: Dict[str, StatusFlag] = {label: flag for flag, label in FLAG_LABELS.items()}

# Bits the player may still hire through (everything else blocks hiring).
HIREABLE_MASK = -4211

NO_STATUS = "None"


def decode(mask: Optional[int]) -> List[str]:
    """Labels of every known bit set in ``mask``, in bit order."""
    if not mask:
        return []
    return [label for flag, label in FLAG_LABELS.items() if mask & flag]


def encode(labels: Iterable[str]) -> int:
    """Inverse of ``decode``. Unknown labels raise ``KeyError``."""
    mask = 0
    for label in labels:
        mask |= _LABEL_TO_FLAG[label]
    return mask


def has_label(mask: Optional[int], label: str) -> bool:
    flag = _LABEL_TO_FLAG.get(label)
    if flag is None:
        return False
    return bool((mask or 0) & flag)


def has_flag(mask: Optional[int], flag: StatusFlag) -> bool:
    return bool((mask or 0) & flag)


def state_label(mask: Optional[int]) -> str:
    """Display text: ``"None"``, ``"Dead, Locked"`` or ``"Unknown (1)"``."""
    if not mask:
        return NO_STATUS
    labels = decode(mask)
    if not labels:
        return f"Unknown ({mask})"
    return ", ".join(labels)


def is_hireable_by_player(mask: Optional[int]) -> bool:
    state = mask or 0
    return state & HIREABLE_MASK == state
