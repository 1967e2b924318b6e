"""Record filter engine.

``apply_all`` runs a fixed sequence of predicates. A predicate whose
config value is unset is skipped outright, so an empty ``FilterConfig``
returns the input list untouched.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from roster.game_data import studios
from roster.person import utils as person_utils
from roster.types import Person

logger = logging.getLogger(__name__)

# Named boolean tokens understood by ``parse_selected_filters``.
DEAD_TOKEN = "Dead"
LOCKED_TOKEN = "Locked"
UNEMPLOYED_TOKEN = "Unemployed"


class GenderFilter(str, Enum):
    ALL = "all"
    MALE = "male"
    FEMALE = "female"


class ShadyFilter(str, Enum):
    ALL = "all"
    SHADY = "shady"
    NOT_SHADY = "notShady"


@dataclass
class FilterConfig:
    """What to drop from a view."""

    search: Optional[str] = None
    exclude_studios: List[str] = field(default_factory=list)
    exclude_dead: bool = False
    exclude_locked: bool = False
    exclude_unemployed: bool = False
    gender: GenderFilter = GenderFilter.ALL
    shady: ShadyFilter = ShadyFilter.ALL


def apply_all(
    persons: Sequence[Person],
    config: FilterConfig,
    names: Optional[Sequence[str]] = None,
) -> List[Person]:
    """Filter ``persons`` by ``config``.

    Args:
        persons: Records to filter. Not modified.
        config: Active filters.
        names: Name table used to resolve display names for ``search``.

    Returns:
        The surviving records, in input order.
    """
    filtered: List[Person] = list(persons)

    if config.exclude_studios:
        excluded = set(config.exclude_studios)
        filtered = [p for p in filtered if person_utils.normalize_studio_id(p) not in excluded]

    if config.exclude_dead:
        filtered = [p for p in filtered if not person_utils.is_dead(p)]

    if config.exclude_locked:
        filtered = [p for p in filtered if not person_utils.is_locked(p)]

    if config.exclude_unemployed:
        filtered = [
            p for p in filtered if person_utils.normalize_studio_id(p) != studios.UNAFFILIATED
        ]

    if config.search:
        needle = config.search.lower()
        filtered = [
            p for p in filtered if needle in person_utils.display_name(p, names).lower()
        ]

    if config.gender != GenderFilter.ALL:
        want_female = config.gender == GenderFilter.FEMALE
        filtered = [p for p in filtered if person_utils.is_female(p) == want_female]

    if config.shady != ShadyFilter.ALL:
        want_shady = config.shady == ShadyFilter.SHADY
        filtered = [p for p in filtered if p.is_shady == want_shady]

    logger.debug("Filtered %d -> %d records", len(persons), len(filtered))
    return filtered


def parse_selected_filters(selected: Iterable[str]) -> FilterConfig:
    """Split UI-selected tokens into studio exclusions and boolean flags.

    Unrecognized tokens are ignored.
    """
    tokens = list(selected)
    return FilterConfig(
        exclude_studios=[token for token in tokens if studios.is_valid_id(token)],
        exclude_dead=DEAD_TOKEN in tokens,
        exclude_locked=LOCKED_TOKEN in tokens,
        exclude_unemployed=UNEMPLOYED_TOKEN in tokens,
    )
