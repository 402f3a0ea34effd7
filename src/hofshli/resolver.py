"""Resolve which observances are days off, and at what leave cost.

A citizen's calendar holds every Yom Tov and official state holiday.
Soldiers additionally lose leave on some eves and minor holidays: for them
those days are holidays that still cost a full or half leave day.
"""

from __future__ import annotations

import datetime
import enum
import logging
from collections.abc import Iterator, Mapping
from typing import NamedTuple

from hofshli.holidays import (
    Observance,
    ObservanceKind,
    ObservanceSource,
    display_name,
    israeli_observances,
)

logger = logging.getLogger(__name__)


class UserCategory(enum.Enum):
    """Who is taking leave.  Values are the persisted preference strings."""

    CITIZEN = "citizen"
    SOLDIER = "soldier"
    CAREER_SOLDIER = "kevah"

    @classmethod
    def parse(cls, value: str | UserCategory | None) -> UserCategory:
        """Parse a stored preference, falling back to ``CITIZEN``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown user category %r, treating as citizen", value)
            return cls.CITIZEN


class HolidayRecord(NamedTuple):
    """A day off, with the fraction of a leave day it still costs."""

    date: datetime.date
    name: str
    display_name: str
    cost: float


# Kinds that are days off for everyone.
DAY_OFF_KINDS = frozenset({ObservanceKind.YOM_TOV, ObservanceKind.MODERN_HOLIDAY})

# Observances that carry a day-off kind but are ordinary working days.
NO_VACATION_HOLIDAYS = frozenset(
    {
        "Yom Yerushalayim",
        "Yom HaAliyah",
        "Pesach II",
        "Pesach VIII",
        "Yom HaShoah",
        "Yom HaZikaron",
        "Shavuot II",
        "Sukkot II",
        "Sigd",
        "Hebrew Language Day",
        "Family Day",
        "Herzl Day",
        "Jabotinsky Day",
        "Yom HaAliyah School Observance",
        "Yitzhak Rabin Memorial Day",
        "Ben-Gurion Day",
    }
)

SOLDIER_SCHEDULE: dict[str, float] = {
    "Purim": 1.0,
    "Erev Pesach": 1.0,
    "Pesach VI": 1.0,
    "Lag BaOmer": 1.0,
    "Erev Shavuot": 0.5,
    "Erev Rosh Hashana": 0.5,
    "Erev Yom Kippur": 1.0,
    "Erev Sukkot": 0.5,
    "Sukkot VII (Hoshana Raba)": 0.5,
}

CAREER_SOLDIER_SCHEDULE: dict[str, float] = {
    **SOLDIER_SCHEDULE,
    "Erev Shavuot": 1.0,
    "Erev Rosh Hashana": 1.0,
    "Erev Sukkot": 1.0,
    "Sukkot VII (Hoshana Raba)": 1.0,
}

_SCHEDULES: dict[UserCategory, dict[str, float]] = {
    UserCategory.CITIZEN: {},
    UserCategory.SOLDIER: SOLDIER_SCHEDULE,
    UserCategory.CAREER_SOLDIER: CAREER_SOLDIER_SCHEDULE,
}


def cost_schedule(category: UserCategory) -> dict[str, float]:
    """Name -> leave cost for the extra days off of *category*."""
    return dict(_SCHEDULES[UserCategory.parse(category)])


class HolidayCalendar(Mapping[datetime.date, HolidayRecord]):
    """Read-only mapping of date -> :class:`HolidayRecord`.

    Calendars for different years of the same category combine with ``|``.
    """

    def __init__(
        self,
        records: Mapping[datetime.date, HolidayRecord] | None = None,
        *,
        category: UserCategory = UserCategory.CITIZEN,
        years: frozenset[int] = frozenset(),
    ):
        self._records = dict(records or {})
        self.category = category
        self.years = years

    def __getitem__(self, key: datetime.date) -> HolidayRecord:
        return self._records[key]

    def __iter__(self) -> Iterator[datetime.date]:
        return iter(sorted(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __or__(self, other: HolidayCalendar) -> HolidayCalendar:
        if not isinstance(other, HolidayCalendar):
            return NotImplemented
        if other.category is not self.category:
            msg = f"Cannot merge {self.category.value} and {other.category.value} calendars"
            raise ValueError(msg)
        return HolidayCalendar(
            {**self._records, **other._records},
            category=self.category,
            years=self.years | other.years,
        )

    def __repr__(self) -> str:
        years = ", ".join(str(y) for y in sorted(self.years))
        return f"HolidayCalendar({self.category.value}, years=[{years}], holidays={len(self)})"


def _select(observances: list[Observance], schedule: dict[str, float]) -> list[Observance]:
    return [
        o
        for o in observances
        if (o.kinds & DAY_OFF_KINDS or o.name in schedule)
        and o.name not in NO_VACATION_HOLIDAYS
    ]


def resolve(
    year: int,
    category: UserCategory | str = UserCategory.CITIZEN,
    *,
    source: ObservanceSource = israeli_observances,
    locale: str = "en",
) -> HolidayCalendar:
    """Build the holiday calendar of *year* for *category*.

    When two days off share a date, the costlier one wins; on a tie the
    first one in source order is kept.  A failing *source* yields an empty
    calendar so callers still get weekend/workday classification.
    """
    category = UserCategory.parse(category)
    schedule = cost_schedule(category)

    try:
        observances = list(source(year))
    except Exception:
        logger.warning(
            "Holiday data unavailable for %d, using an empty calendar", year, exc_info=True
        )
        observances = []

    records: dict[datetime.date, HolidayRecord] = {}
    for obs in _select(observances, schedule):
        record = HolidayRecord(
            date=obs.date,
            name=obs.name,
            display_name=display_name(obs.name, locale),
            cost=schedule.get(obs.name, 1.0),
        )
        existing = records.get(obs.date)
        if existing is not None:
            if record.cost <= existing.cost:
                logger.debug("%s: keeping %s over %s", obs.date, existing.name, record.name)
                continue
            logger.debug("%s: replacing %s with %s", obs.date, existing.name, record.name)
        records[obs.date] = record

    logger.debug("Resolved %d holidays for %d (%s)", len(records), year, category.value)
    return HolidayCalendar(records, category=category, years=frozenset({year}))


def resolve_range(
    start: datetime.date,
    end: datetime.date,
    category: UserCategory | str = UserCategory.CITIZEN,
    *,
    source: ObservanceSource = israeli_observances,
    locale: str = "en",
) -> HolidayCalendar:
    """Union of the calendars of every year touched by *start*..*end*."""
    lo, hi = sorted((start.year, end.year))
    category = UserCategory.parse(category)
    calendar = HolidayCalendar(category=category)
    for year in range(lo, hi + 1):
        calendar = calendar | resolve(year, category, source=source, locale=locale)
    return calendar
