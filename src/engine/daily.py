"""
FlagQuest - Daily Challenge Generator

Deterministic date-seeded question set: every player gets the same five
countries on the same calendar day, with no random state involved.
"""

from datetime import date
from typing import ClassVar, Sequence

from src.engine.base import Country
from src.engine.catalog import COUNTRIES

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class DailyChallengeGenerator:
    """Stateless generator for the daily challenge."""

    QUESTION_COUNT: ClassVar[int] = 5
    ORDINAL_MODULUS: ClassVar[int] = 100

    @classmethod
    def date_key(cls, day: date) -> str:
        """Render a date as e.g. "Mon Oct 19 2026".

        Names are fixed English abbreviations so the key does not depend
        on the process locale.
        """
        return (
            f"{_WEEKDAYS[day.weekday()]} {_MONTHS[day.month - 1]} "
            f"{day.day:02d} {day.year:04d}"
        )

    @classmethod
    def seed(cls, day: date) -> int:
        """Sum of character codes of the date key."""
        return sum(ord(ch) for ch in cls.date_key(day))

    @classmethod
    def ordinal(cls, country: Country, seed: int) -> int:
        """Sort key for one catalog row on a given seed."""
        return (ord(country.id[0]) + seed) % cls.ORDINAL_MODULUS

    @classmethod
    def generate(
        cls,
        day: date | None = None,
        *,
        catalog: Sequence[Country] = COUNTRIES,
        count: int | None = None,
    ) -> tuple[Country, ...]:
        """The daily question set for `day` (defaults to today).

        The catalog is stable-sorted by ordinal, so ties keep catalog order.
        """
        day = day or date.today()
        count = cls.QUESTION_COUNT if count is None else count
        seed = cls.seed(day)
        ordered = sorted(catalog, key=lambda c: cls.ordinal(c, seed))
        return tuple(ordered[:count])
