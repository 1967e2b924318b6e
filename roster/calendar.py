"""In-game calendar for roster.

Two text encodings are understood:
- long form ``"June 14, 2010"`` (the simulation's current date)
- ``"D-M-YYYY"`` (birth and death dates)

``GameDate`` holds the raw year/month/day fields. Out-of-range days and
months (``"31-2-1990"``) are kept as given and only normalized when the
date is turned into a ``datetime.date`` (``31-2-1990`` becomes March 3).
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from roster.types import Contract

logger = logging.getLogger(__name__)

MONTHS_FULL = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
MONTHS_SHORT = [name[:3] for name in MONTHS_FULL]

GAME_START_DATE = date(1929, 1, 1)

_LONG_FORM = re.compile(r"(\w+) (\d+), (\d+)")


@dataclass(frozen=True)
class GameDate:
    """A day-resolution date. ``month`` is 1-based."""

    year: int
    month: int
    day: int

    # === Parsing ===

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["GameDate"]:
        """Parse ``"Month D, YYYY"`` (full month names only)."""
        if not text:
            return None
        match = _LONG_FORM.search(text)
        if not match:
            return None
        month_name, day, year = match.groups()
        if month_name not in MONTHS_FULL:
            return None
        return cls(int(year), MONTHS_FULL.index(month_name) + 1, int(day))

    @classmethod
    def from_dmy(cls, text: Optional[str]) -> Optional["GameDate"]:
        """Parse ``"D-M-YYYY"``. Anything but three integer parts yields ``None``."""
        if not text:
            return None
        parts = text.split("-")
        if len(parts) != 3:
            return None
        try:
            day, month, year = (int(part) for part in parts)
        except ValueError:
            logger.debug("Unparseable day-month-year date %r", text)
            return None
        return cls(year, month, day)

    @classmethod
    def from_date(cls, value: date) -> "GameDate":
        return cls(value.year, value.month, value.day)

    # === Conversion ===

    def to_date(self) -> date:
        """Normalize into a real calendar date, rolling overflowing fields over."""
        year = self.year + (self.month - 1) // 12
        month = (self.month - 1) % 12 + 1
        return date(year, month, 1) + timedelta(days=self.day - 1)

    def format(self, style: str = "short") -> str:
        """Render as ``"Jun 14, 2010"`` (short) or ``"June 14, 2010"`` (full)."""
        months = MONTHS_FULL if style == "full" else MONTHS_SHORT
        normalized = self.to_date()
        return f"{months[normalized.month - 1]} {normalized.day}, {normalized.year}"

    def to_dmy(self) -> str:
        return f"{self.day}-{self.month}-{self.year}"

    # === Arithmetic ===

    def age_to(self, current: "GameDate") -> int:
        """Whole years elapsed from this date to ``current`` (anniversary-exact)."""
        age = current.year - self.year
        if (current.month, current.day) < (self.month, self.day):
            age -= 1
        return age

    def days_until(self, target: "GameDate") -> int:
        """Signed number of calendar days from this date to ``target``."""
        return (target.to_date() - self.to_date()).days


def calculate_age(birth_date: Optional[str], current_date: Optional[str]) -> Optional[int]:
    """Age for a ``D-M-YYYY`` birth date at a long-form current date.

    Returns ``None`` when either date is missing or malformed.
    """
    birth = GameDate.from_dmy(birth_date)
    current = GameDate.parse(current_date)
    if birth is None or current is None:
        return None
    return birth.age_to(current)


def _parse_signing_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        logger.debug("Unparseable contract signing date %r", value)
        return None


def contract_end(contract: Optional[Contract]) -> Optional[GameDate]:
    """Signing date plus the contract's duration in years."""
    if contract is None:
        return None
    signed = _parse_signing_date(contract.date_of_signing)
    if signed is None:
        return None
    return GameDate(signed.year + contract.amount, signed.month, signed.day)


def contract_days_left(
    contract: Optional[Contract], current_date: Optional[str]
) -> Optional[Union[int, float]]:
    """Days until the contract ends, ``math.inf`` for unlimited contracts.

    Returns ``None`` when the contract or either date cannot be resolved.
    """
    if contract is None:
        return None
    if contract.is_unlimited:
        return math.inf
    current = GameDate.parse(current_date)
    end = contract_end(contract)
    if current is None or end is None:
        return None
    try:
        return current.days_until(end)
    except (ValueError, OverflowError):
        logger.debug("Contract end %s is out of calendar range", end)
        return None


def current_date_from_time_passed(time_passed: Optional[str]) -> str:
    """Long-form date for a ``D.hh:mm:ss`` elapsed-time value since game start."""
    head = (time_passed or "").split(".")[0]
    try:
        days = int(head)
    except ValueError:
        days = 0
    return (GAME_START_DATE + timedelta(days=days)).strftime("%B %d, %Y")
