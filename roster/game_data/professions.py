"""Profession catalog and category membership.

A category passed to ``list_by_category`` is either a profession key or
one of two group names: ``Executive`` (any captain profession) and
``DepartmentHead`` (any lieutenant profession).
"""

from typing import Dict, Iterable, Optional, Tuple

EXECUTIVE = "Executive"
DEPARTMENT_HEAD = "DepartmentHead"

CAPTAIN_PROFESSIONS: Tuple[str, ...] = ("CptHR", "CptLawyer", "CptFinancier", "CptPR")

LIEUTENANT_PROFESSIONS: Tuple[str, ...] = (
    "LieutScript",
    "LieutPrep",
    "LieutProd",
    "LieutPost",
    "LieutRelease",
    "LieutSecurity",
    "LieutProducers",
    "LieutInfrastructure",
    "LieutTech",
    "LieutMuseum",
    "LieutEscort",
)

DISPLAY_NAMES: Dict[str, str] = {
    "FilmEditor": "Editor",
    "Scriptwriter": "Screenwriter",
    "CptHR": "Human Resources Executive",
    "CptLawyer": "Legal Executive",
    "CptFinancier": "Financial Executive",
    "CptPR": "Public Relations Executive",
}


def display_name(kind: Optional[str]) -> str:
    if not kind:
        return "Unknown"
    return DISPLAY_NAMES.get(kind, kind)


def matches_category(kinds: Iterable[str], category: str) -> bool:
    """True if any of ``kinds`` belongs to ``category``."""
    kinds = set(kinds)
    if category == EXECUTIVE:
        return any(kind in kinds for kind in CAPTAIN_PROFESSIONS)
    if category == DEPARTMENT_HEAD:
        return any(kind in kinds for kind in LIEUTENANT_PROFESSIONS)
    return category in kinds


def captain_profession(kinds: Iterable[str]) -> Optional[str]:
    """First captain profession among ``kinds``, in catalog order."""
    kinds = set(kinds)
    for kind in CAPTAIN_PROFESSIONS:
        if kind in kinds:
            return kind
    return None
