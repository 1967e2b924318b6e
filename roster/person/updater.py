"""Record mutation engine.

Every function takes a ``Person`` and returns a new one built with
``dataclasses.replace``, or the very same object when the edit changes
nothing. Inputs are never mutated, so a list holding the previous
record stays valid.

Field names are the wire names (``selfEsteem``, ``whiteTag:ACTION``).
Names outside the dispatch table raise ``UnsupportedFieldError``.
"""

import dataclasses
import logging
from typing import Callable, Dict, FrozenSet, Optional, Union

from roster.person import white_tags
from roster.person.white_tags import TAG_FIELD_PREFIX
from roster.protocols import UnsupportedFieldError
from roster.types import Person, Profession
from roster.utils import format_decimal

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _set_mood(person: Person, value: Number) -> Person:
    return dataclasses.replace(person, mood=float(value))


def _set_attitude(person: Person, value: Number) -> Person:
    return dataclasses.replace(person, attitude=float(value))


def _set_self_esteem(person: Person, value: Number) -> Person:
    return dataclasses.replace(person, self_esteem=format_decimal(value))


def _set_limit(person: Person, value: Number) -> Person:
    return dataclasses.replace(person, limit=float(value))


def _set_readiness(person: Person, value: Number) -> Person:
    return dataclasses.replace(person, readiness=float(value))


def _set_state(person: Person, value: Number) -> Person:
    return dataclasses.replace(person, state=int(value))


def _set_gender(person: Person, value: Number) -> Person:
    return dataclasses.replace(person, gender=int(value))


def _set_portrait(person: Person, value: Number) -> Person:
    return dataclasses.replace(person, portrait_base_id=int(value))


def _set_skill(person: Person, value: Number) -> Person:
    if person.profession is None:
        return person
    profession = Profession(kind=person.profession.kind, level=format_decimal(value))
    return dataclasses.replace(person, profession=profession)


def _set_shady(person: Person, value: Number) -> Person:
    return dataclasses.replace(person, is_shady=value == 1)


def _bonus_card_setter(index: int) -> Callable[[Person, Number], Person]:
    def setter(person: Person, value: Number) -> Person:
        cards = person.bonus_cards
        if cards is None or index >= len(cards):
            return person
        updated = list(cards)
        updated[index] = int(value)
        return dataclasses.replace(person, bonus_cards=updated)

    return setter


_SCALAR_SETTERS: Dict[str, Callable[[Person, Number], Person]] = {
    "mood": _set_mood,
    "attitude": _set_attitude,
    "selfEsteem": _set_self_esteem,
    "limit": _set_limit,
    "readiness": _set_readiness,
    "state": _set_state,
    "gender": _set_gender,
    "portraitBaseId": _set_portrait,
    "skill": _set_skill,
    "isShady": _set_shady,
    "bonusCardMoney": _bonus_card_setter(0),
    "bonusCardInfluencePoints": _bonus_card_setter(1),
}

# birthYear and the tag prefix are handled outside the scalar table.
SUPPORTED_FIELDS: FrozenSet[str] = frozenset(_SCALAR_SETTERS) | {"birthYear"}

TEXT_FIELDS: Dict[str, str] = {
    "firstNameId": "first_name_id",
    "lastNameId": "last_name_id",
    "customName": "custom_name",
}


def is_supported_field(field: str) -> bool:
    if field.startswith(TAG_FIELD_PREFIX):
        return len(field) > len(TAG_FIELD_PREFIX)
    return field in SUPPORTED_FIELDS


def tag_id_for(field: str) -> Optional[str]:
    """The tag id of a ``whiteTag:<id>`` field, else ``None``."""
    if field.startswith(TAG_FIELD_PREFIX) and len(field) > len(TAG_FIELD_PREFIX):
        return field[len(TAG_FIELD_PREFIX):]
    return None


def _set_birth_year(person: Person, value: Optional[Number]) -> Person:
    if value is None or not person.birth_date:
        return person
    parts = person.birth_date.split("-")
    if len(parts) != 3:
        logger.debug("Person %s has unparseable birth date %r", person.id, person.birth_date)
        return person
    return dataclasses.replace(person, birth_date=f"{parts[0]}-{parts[1]}-{int(value)}")


def update_field(person: Person, field: str, value: Optional[Number]) -> Person:
    """Apply one numeric field edit.

    ``None`` removes the tag for ``whiteTag:<id>`` fields and means 0 for
    every other field (``birthYear`` ignores it).

    Raises:
        UnsupportedFieldError: ``field`` is not in the dispatch table.
    """
    tag_id = tag_id_for(field)
    if tag_id is not None:
        if value is None:
            if not white_tags.has_tag(person.white_tags, tag_id):
                return person
            store = white_tags.remove(person.white_tags, tag_id)
        else:
            store = white_tags.create_or_update(person.white_tags, tag_id, float(value))
        return dataclasses.replace(person, white_tags=store)

    if field == "birthYear":
        return _set_birth_year(person, value)

    setter = _SCALAR_SETTERS.get(field)
    if setter is None:
        raise UnsupportedFieldError(field)
    return setter(person, 0 if value is None else value)


def update_text_field(person: Person, field: str, value: Optional[str]) -> Person:
    """Replace ``firstNameId``, ``lastNameId`` or ``customName``; ``None`` clears it."""
    attribute = TEXT_FIELDS.get(field)
    if attribute is None:
        raise UnsupportedFieldError(field)
    return dataclasses.replace(person, **{attribute: value})


def add_trait(person: Person, trait: str) -> Person:
    """Prepend ``trait`` unless already present."""
    labels = person.labels or []
    if trait in labels:
        return person
    return dataclasses.replace(person, labels=[trait, *labels])


def remove_trait(person: Person, trait: str) -> Person:
    labels = person.labels or []
    if trait not in labels:
        return person
    return dataclasses.replace(person, labels=[t for t in labels if t != trait])


def normalize_field_name(field: str) -> str:
    """Map the ART/COM tag fields to their short payload names."""
    if field == f"{TAG_FIELD_PREFIX}ART":
        return "art"
    if field == f"{TAG_FIELD_PREFIX}COM":
        return "com"
    return field
