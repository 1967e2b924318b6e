"""
Shared record types for roster.

All person-record dataclasses live here. They are the vocabulary shared
by the codecs, the filter/sort/mutation pipeline, the session and the
backend adapters. Wire data from the backend is resolved into these
types once, at the boundary (``Person.from_dict``), and re-emitted with
``Person.to_dict``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from roster.utils import format_decimal, to_float

logger = logging.getLogger(__name__)

PersonId = Union[int, str]

# Instant used for every synthesized tag and history entry.
GAME_START_INSTANT = "1929-01-01T00:00:00"

# Engagement id / source type of the base history entry of a tag.
BASE_MOVIE_ID = 0
BASE_SOURCE_TYPE = 0


# === Enums ===


class Gender(int, Enum):
    """Gender discriminator as stored by the backend."""

    MALE = 0
    FEMALE = 1


class ContractType(int, Enum):
    """Contract renewal-type discriminator."""

    STANDARD = 0
    RENEWABLE = 1
    UNLIMITED = 2  # No expiry; days remaining is unbounded


# === Tag store types ===


@dataclass
class OverallValue:
    """One historical source entry of a tagged value."""

    movie_id: int = BASE_MOVIE_ID
    source_type: int = BASE_SOURCE_TYPE
    value: Union[str, float] = "0.000"
    date_added: str = GAME_START_INSTANT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "movieId": self.movie_id,
            "sourceType": self.source_type,
            "value": self.value,
            "dateAdded": self.date_added,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OverallValue":
        return cls(
            movie_id=int(to_float(data.get("movieId"), BASE_MOVIE_ID)),
            source_type=int(to_float(data.get("sourceType"), BASE_SOURCE_TYPE)),
            value=data.get("value", "0.000"),
            date_added=data.get("dateAdded") or GAME_START_INSTANT,
        )


@dataclass
class WhiteTag:
    """A tagged numeric value ("white tag") attached to a person.

    ``value`` is normally fixed three-decimal text, but the backend may
    hand back plain numbers; readers coerce through ``white_tags.read``.
    """

    id: str
    value: Union[str, float]
    date_added: str = GAME_START_INSTANT
    movie_id: int = BASE_MOVIE_ID  # Originating engagement
    is_overall: bool = False  # Aggregate flag
    overall_values: List[OverallValue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "value": self.value,
            "dateAdded": self.date_added,
            "movieId": self.movie_id,
            "IsOverall": self.is_overall,
            "overallValues": [entry.to_dict() for entry in self.overall_values],
        }

    @classmethod
    def from_dict(cls, tag_id: str, data: Dict[str, Any]) -> "WhiteTag":
        history = data.get("overallValues") or []
        return cls(
            id=data.get("id") or tag_id,
            value=data.get("value", "0.000"),
            date_added=data.get("dateAdded") or GAME_START_INSTANT,
            movie_id=int(to_float(data.get("movieId"), BASE_MOVIE_ID)),
            is_overall=bool(data.get("IsOverall", False)),
            overall_values=[
                OverallValue.from_dict(entry) for entry in history if isinstance(entry, dict)
            ],
        )


TagStore = Dict[str, WhiteTag]


# === Person sub-records ===


@dataclass(frozen=True)
class Profession:
    """The person's single profession and its decimal skill level text."""

    kind: str
    level: str = "0"

    @property
    def value(self) -> float:
        return to_float(self.level)


@dataclass
class Contract:
    """Employment contract of a person."""

    contract_type: int = ContractType.STANDARD.value
    amount: int = 0  # Duration in years
    start_amount: int = 0
    initial_fee: str = "0"
    monthly_salary: str = "0"
    weight_to_salary: str = "0"
    date_of_signing: Optional[str] = None

    @property
    def is_unlimited(self) -> bool:
        return self.contract_type == ContractType.UNLIMITED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contractType": self.contract_type,
            "amount": self.amount,
            "startAmount": self.start_amount,
            "initialFee": self.initial_fee,
            "monthlySalary": self.monthly_salary,
            "weightToSalary": self.weight_to_salary,
            "dateOfSigning": self.date_of_signing,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contract":
        return cls(
            contract_type=int(to_float(data.get("contractType"))),
            amount=int(to_float(data.get("amount"))),
            start_amount=int(to_float(data.get("startAmount"))),
            initial_fee=str(data.get("initialFee", "0")),
            monthly_salary=str(data.get("monthlySalary", "0")),
            weight_to_salary=str(data.get("weightToSalary", "0")),
            date_of_signing=data.get("dateOfSigning"),
        )


# === Person ===

# Wire keys consumed by Person.from_dict; anything else lands in ``extra``.
_KNOWN_KEYS = frozenset(
    {
        "id",
        "firstNameId",
        "lastNameId",
        "customName",
        "birthDate",
        "deathDate",
        "causeOfDeath",
        "gender",
        "studioId",
        "portraitBaseId",
        "mood",
        "attitude",
        "selfEsteem",
        "readiness",
        "limit",
        "Limit",
        "state",
        "professions",
        "whiteTagsNEW",
        "contract",
        "labels",
        "activeOrPlannedMovies",
        "isShady",
        "bonusCards",
    }
)


@dataclass
class Person:
    """A person record projected from the save file.

    Identity (``id``) never changes. Pipeline code never mutates a Person
    in place; it builds a new one with ``dataclasses.replace``.
    """

    id: PersonId
    first_name_id: Optional[str] = None
    last_name_id: Optional[str] = None
    custom_name: Optional[str] = None
    birth_date: Optional[str] = None  # "D-M-YYYY"
    death_date: Optional[str] = None
    cause_of_death: Optional[int] = None
    gender: int = Gender.MALE.value
    studio_id: Optional[str] = None  # None / "NONE" means unaffiliated
    portrait_base_id: Optional[int] = None
    mood: float = 0.0
    attitude: float = 0.0  # Loyalty
    self_esteem: str = "0"  # Decimal text, roughly -0.99..2.0
    readiness: Optional[float] = None
    limit: float = 0.0  # Skill ceiling
    state: int = 0  # Status bitmask
    profession: Optional[Profession] = None
    white_tags: Optional[TagStore] = None  # None == no store
    labels: Optional[List[str]] = None  # Trait ids
    contract: Optional[Contract] = None
    active_or_planned_movies: Optional[List[Any]] = None
    is_shady: bool = False
    bonus_cards: Optional[List[int]] = None  # Department heads: [money, influence points]
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Person":
        """Build a Person from backend wire data."""
        return cls(
            id=data["id"],
            first_name_id=_optional_text(data.get("firstNameId")),
            last_name_id=_optional_text(data.get("lastNameId")),
            custom_name=data.get("customName") or None,
            birth_date=data.get("birthDate"),
            death_date=data.get("deathDate"),
            cause_of_death=data.get("causeOfDeath"),
            gender=int(to_float(data.get("gender"))),
            studio_id=_optional_text(data.get("studioId")),
            portrait_base_id=data.get("portraitBaseId"),
            mood=to_float(data.get("mood")),
            attitude=to_float(data.get("attitude")),
            self_esteem=_decimal_text(data.get("selfEsteem")),
            readiness=to_float(data["readiness"]) if "readiness" in data else None,
            limit=to_float(data["limit"] if data.get("limit") is not None else data.get("Limit")),
            state=int(to_float(data.get("state"))),
            profession=_parse_profession(data.get("professions"), data.get("id")),
            white_tags=_parse_white_tags(data.get("whiteTagsNEW")),
            labels=list(data["labels"]) if isinstance(data.get("labels"), list) else None,
            contract=(
                Contract.from_dict(data["contract"])
                if isinstance(data.get("contract"), dict)
                else None
            ),
            active_or_planned_movies=data.get("activeOrPlannedMovies"),
            is_shady=bool(data.get("isShady", False)),
            bonus_cards=(
                list(data["bonusCards"]) if isinstance(data.get("bonusCards"), list) else None
            ),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Re-emit backend wire keys."""
        data: Dict[str, Any] = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "firstNameId": self.first_name_id,
                "lastNameId": self.last_name_id,
                "customName": self.custom_name,
                "birthDate": self.birth_date,
                "deathDate": self.death_date,
                "causeOfDeath": self.cause_of_death,
                "gender": self.gender,
                "studioId": self.studio_id,
                "portraitBaseId": self.portrait_base_id,
                "mood": self.mood,
                "attitude": self.attitude,
                "selfEsteem": self.self_esteem,
                "limit": self.limit,
                "Limit": self.limit,
                "state": self.state,
                "professions": (
                    {self.profession.kind: self.profession.level} if self.profession else {}
                ),
                "labels": list(self.labels) if self.labels is not None else None,
                "activeOrPlannedMovies": self.active_or_planned_movies,
                "isShady": self.is_shady,
            }
        )
        if self.readiness is not None:
            data["readiness"] = self.readiness
        if self.white_tags:
            data["whiteTagsNEW"] = {k: tag.to_dict() for k, tag in self.white_tags.items()}
        if self.contract is not None:
            data["contract"] = self.contract.to_dict()
        if self.bonus_cards is not None:
            data["bonusCards"] = list(self.bonus_cards)
        return data


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _decimal_text(value: Any) -> str:
    if value is None:
        return "0"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_decimal(value)
    return str(value)


def _parse_profession(raw: Any, person_id: Any) -> Optional[Profession]:
    if not isinstance(raw, dict) or not raw:
        return None
    kind, level = next(iter(raw.items()))
    if len(raw) > 1:
        logger.debug("Person %s has %d professions, using %s", person_id, len(raw), kind)
    return Profession(kind=str(kind), level=_decimal_text(level))


def _parse_white_tags(raw: Any) -> Optional[TagStore]:
    # Legacy saves carry a list here; it holds nothing usable.
    if not isinstance(raw, dict):
        return None
    store = {
        tag_id: WhiteTag.from_dict(tag_id, tag)
        for tag_id, tag in raw.items()
        if isinstance(tag, dict)
    }
    return store or None
