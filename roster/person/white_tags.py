"""Tag store ("white tag") codec.

A tag store maps a tag id to a ``WhiteTag``. Genres and the ART/COM
public-image values live here. An empty store is never returned: removing
the last tag yields ``None``, and readers treat ``None`` and ``{}`` alike.

Every function returns a new store; the input store and its tags are
never mutated.
"""

import dataclasses
import logging
from typing import List, Optional, Tuple

from roster.game_data import genres
from roster.types import (
    BASE_MOVIE_ID,
    BASE_SOURCE_TYPE,
    GAME_START_INSTANT,
    OverallValue,
    TagStore,
    WhiteTag,
)
from roster.utils import to_float

logger = logging.getLogger(__name__)

# Field-name prefix routing an edit to the tag store ("whiteTag:ACTION").
TAG_FIELD_PREFIX = "whiteTag:"


def format_tag_value(value: float) -> str:
    """Tag values are serialized with exactly three decimals."""
    return f"{value:.3f}"


def create_tag(tag_id: str, value: float) -> WhiteTag:
    """A fresh tag with a single base history entry."""
    text = format_tag_value(value)
    return WhiteTag(
        id=tag_id,
        value=text,
        date_added=GAME_START_INSTANT,
        movie_id=BASE_MOVIE_ID,
        is_overall=False,
        overall_values=[
            OverallValue(
                movie_id=BASE_MOVIE_ID,
                source_type=BASE_SOURCE_TYPE,
                value=text,
                date_added=GAME_START_INSTANT,
            )
        ],
    )


def _is_base_entry(entry: OverallValue) -> bool:
    return entry.movie_id == BASE_MOVIE_ID and entry.source_type == BASE_SOURCE_TYPE


def _with_value(tag: WhiteTag, value: float) -> WhiteTag:
    """Set the value and exactly one history entry: the first base entry, else a new one."""
    text = format_tag_value(value)
    history = list(tag.overall_values)
    for index, entry in enumerate(history):
        if _is_base_entry(entry):
            history[index] = dataclasses.replace(entry, value=text)
            break
    else:
        history.append(
            OverallValue(
                movie_id=BASE_MOVIE_ID,
                source_type=BASE_SOURCE_TYPE,
                value=text,
                date_added=GAME_START_INSTANT,
            )
        )
    return dataclasses.replace(tag, value=text, overall_values=history)


def create_or_update(store: Optional[TagStore], tag_id: str, value: float) -> TagStore:
    """Insert a new tag or overwrite an existing tag's value.

    An existing tag keeps its creation date and engagement id; only its
    value and its first base history entry change, and a base entry is
    appended when the history has none.
    """
    updated = dict(store or {})
    existing = updated.get(tag_id)
    if existing is None:
        updated[tag_id] = create_tag(tag_id, value)
    else:
        updated[tag_id] = _with_value(existing, value)
    return updated


def remove(store: Optional[TagStore], tag_id: str) -> Optional[TagStore]:
    """Drop ``tag_id``. Returns ``None`` when nothing is left."""
    if not store:
        return None
    updated = {key: tag for key, tag in store.items() if key != tag_id}
    return updated or None


def read(store: Optional[TagStore], tag_id: str) -> float:
    """Numeric value of a tag; 0 when the tag or the store is missing."""
    if not store:
        return 0.0
    tag = store.get(tag_id)
    if tag is None:
        return 0.0
    return to_float(tag.value)


def has_tag(store: Optional[TagStore], tag_id: str) -> bool:
    return bool(store) and tag_id in store


def entries(store: Optional[TagStore]) -> List[WhiteTag]:
    if not store:
        return []
    return list(store.values())


# === Genres ===


def genres_with_values(store: Optional[TagStore]) -> List[Tuple[str, float]]:
    """``(genre, value)`` for each genre present, in catalog order."""
    return [(genre, read(store, genre)) for genre in genres.GENRES if has_tag(store, genre)]


def is_established(store: Optional[TagStore], genre: str) -> bool:
    return read(store, genre) >= genres.ESTABLISHED_THRESHOLD


def count_established(store: Optional[TagStore]) -> int:
    return sum(1 for genre in genres.GENRES if is_established(store, genre))


def can_establish(store: Optional[TagStore], genre: str) -> bool:
    """Whether ``genre`` may be raised to the threshold without exceeding the cap."""
    if is_established(store, genre):
        return True
    return count_established(store) < genres.MAX_ESTABLISHED


def genre_level(store: Optional[TagStore], genre: str) -> int:
    return genres.level_for(read(store, genre))
