"""Record sort engine.

Sorting is decorate-sort-undecorate: one numeric key per record, then a
single stable sort. Records missing the data a key needs get key 0 and
sort together instead of being dropped.

``SortedView`` sits in front of ``sort`` and keeps the last order so that
a value edit on a visible record does not reshuffle the list.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from roster.calendar import calculate_age
from roster.person import white_tags
from roster.person import utils as person_utils
from roster.types import Person, PersonId
from roster.utils import to_float

logger = logging.getLogger(__name__)


class SortField(str, Enum):
    SKILL = "skill"
    SELF_ESTEEM = "selfEsteem"
    AGE = "age"
    ART = "art"
    COM = "com"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortContext:
    current_date: Optional[str] = None  # Long form, needed for AGE


def sort_value(person: Person, field: SortField, context: Optional[SortContext] = None) -> float:
    """The numeric sort key of ``person`` for ``field``."""
    field = SortField(field)
    if field is SortField.SKILL:
        return person_utils.profession_value(person)
    if field is SortField.SELF_ESTEEM:
        return to_float(person.self_esteem)
    if field is SortField.AGE:
        current_date = context.current_date if context else None
        if not person.birth_date or not current_date:
            return 0.0
        return float(calculate_age(person.birth_date, current_date) or 0)
    if field is SortField.ART:
        return white_tags.read(person.white_tags, "ART")
    return white_tags.read(person.white_tags, "COM")


def sort(
    persons: Sequence[Person],
    field: SortField,
    order: SortOrder = SortOrder.ASC,
    context: Optional[SortContext] = None,
) -> List[Person]:
    """Stable sort of ``persons`` by ``field``. Equal keys keep input order."""
    decorated: List[Tuple[float, Person]] = [(sort_value(p, field, context), p) for p in persons]
    decorated.sort(key=lambda pair: pair[0], reverse=SortOrder(order) is SortOrder.DESC)
    return [person for _, person in decorated]


def reconcile_order(previous_ids: Sequence[PersonId], persons: Sequence[Person]) -> List[Person]:
    """Lay ``persons`` out in ``previous_ids`` order, appending unseen ids in encounter order.

    Ids in ``previous_ids`` that are no longer present are dropped.
    """
    by_id = {p.id: p for p in persons}
    known = set(previous_ids)
    ordered = [by_id[pid] for pid in previous_ids if pid in by_id]
    ordered.extend(p for p in persons if p.id not in known)
    return ordered


class SortedView:
    """Caches the last sorted order of a filtered collection.

    A full sort runs when the sort settings change, when ``refresh`` is
    requested, or when the set of ids differs from the cached one. If only
    field values changed, the cached order is reused with the fresh
    records substituted in.

    With ``resort_on_membership_change=False`` a membership change is
    reconciled instead (known ids keep their slots, new ids go last).
    """

    def __init__(self, resort_on_membership_change: bool = True):
        self.resort_on_membership_change = resort_on_membership_change
        self._order: List[PersonId] = []
        self._settings: Optional[Tuple[SortField, SortOrder, Optional[str]]] = None
        self.full_sorts = 0

    @property
    def order(self) -> List[PersonId]:
        return list(self._order)

    def invalidate(self) -> None:
        self._settings = None
        self._order = []

    def update(
        self,
        persons: Sequence[Person],
        field: SortField,
        order: SortOrder = SortOrder.ASC,
        context: Optional[SortContext] = None,
        refresh: bool = False,
    ) -> List[Person]:
        settings = (SortField(field), SortOrder(order), context.current_date if context else None)
        same_members = {p.id for p in persons} == set(self._order)

        if refresh or settings != self._settings or (
            not same_members and self.resort_on_membership_change
        ):
            result = sort(persons, field, order, context)
            self.full_sorts += 1
            logger.debug("Full sort of %d records by %s %s", len(result), field, order)
        else:
            result = reconcile_order(self._order, persons)

        self._settings = settings
        self._order = [p.id for p in result]
        return result
