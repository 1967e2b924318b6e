"""Read-only helpers over ``Person`` used by the filter, sort and session layers."""

from typing import Iterable, List, Optional, Sequence

from roster.game_data import professions, studios
from roster.person import status_flags
from roster.person.status_flags import StatusFlag
from roster.types import Gender, Person


def _name_part(names: Sequence[str], name_id: str) -> str:
    try:
        index = int(name_id)
    except ValueError:
        return name_id
    if 0 <= index < len(names):
        return names[index] or name_id
    return name_id


def display_name(person: Person, names: Optional[Sequence[str]] = None) -> str:
    """Custom name, else the resolved first/last names, else ``"Person <id>"``."""
    if person.custom_name:
        return person.custom_name
    if names and person.first_name_id and person.last_name_id:
        first = _name_part(names, person.first_name_id)
        last = _name_part(names, person.last_name_id)
        return f"{first} {last}"
    return f"Person {person.id}"


def normalize_studio_id(person: Person) -> str:
    return studios.normalize_id(person.studio_id)


def studio_display(studio_id: Optional[str]) -> str:
    normalized = studios.normalize_id(studio_id)
    if normalized == studios.UNAFFILIATED:
        return studios.UNAFFILIATED
    if normalized == studios.PLAYER_STUDIO_ID:
        return "Player"
    return studios.opponent_name(normalized) or normalized


def is_dead(person: Person) -> bool:
    return status_flags.has_flag(person.state, StatusFlag.DEAD)


def is_locked(person: Person) -> bool:
    return status_flags.has_flag(person.state, StatusFlag.LOCKED)


def is_busy(person: Person) -> bool:
    return bool(person.active_or_planned_movies)


def is_hireable_by_player(person: Person) -> bool:
    return status_flags.is_hireable_by_player(person.state)


def profession_name(person: Person) -> str:
    return person.profession.kind if person.profession else "Unknown"


def profession_display(person: Person) -> str:
    return professions.display_name(person.profession.kind if person.profession else None)


def profession_value(person: Person) -> float:
    return person.profession.value if person.profession else 0.0


def is_female(person: Person) -> bool:
    return person.gender == Gender.FEMALE


def gender_label(gender: Optional[int]) -> str:
    return "Male" if gender == Gender.MALE else "Female"


def available_studios(persons: Iterable[Person]) -> List[str]:
    """Competitor studio ids employing anyone in ``persons``, sorted."""
    found = {normalize_studio_id(p) for p in persons}
    found.discard(studios.UNAFFILIATED)
    found.discard(studios.PLAYER_STUDIO_ID)
    return sorted(found)
