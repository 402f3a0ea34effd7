"""Vacation day calculator

Given a date range, work out how many real leave days it takes to be away
for all of it.  Fridays and Saturdays are already off, and so are the
holidays resolved for the user's category.  Some holidays still cost a
full or half leave day (see :mod:`hofshli.resolver`).

Pipeline:
  1. classify  - one DayClassification per date in the range
  2. aggregate - collapse consecutive same-category days into Spans
  3. summarize - count leave days, weekend days and holiday cost
"""

from __future__ import annotations

import datetime
import enum
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import NamedTuple

from hofshli.holidays import ObservanceSource, israeli_observances
from hofshli.resolver import HolidayCalendar, HolidayRecord, UserCategory, resolve

logger = logging.getLogger(__name__)

WEEKEND_DAYS = frozenset({4, 5})  # Friday, Saturday

# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class InvalidRangeError(ValueError):
    """Raised when a range starts after it ends."""

    def __init__(self, start: datetime.date, end: datetime.date):
        self.start = start
        self.end = end
        super().__init__(f"Range start {start.isoformat()} is after its end {end.isoformat()}")


class DayCategory(enum.Enum):
    WORKDAY = "workday"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"

    @property
    def title(self) -> str:
        return self.value.capitalize()


class DayClassification(NamedTuple):
    """One calendar day and what it is."""

    date: datetime.date
    category: DayCategory
    label: str = ""
    cost: float = 0.0


class Span(NamedTuple):
    """A maximal run of consecutive days with the same category.

    ``label`` is the label of the last day in the span; ``labels`` keeps
    every distinct label in order for spans that join adjacent holidays.
    """

    start_date: datetime.date
    end_date: datetime.date
    category: DayCategory
    label: str
    total_cost: float
    labels: tuple[str, ...] = ()

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1


class Totals(NamedTuple):
    required_leave_days: int
    weekend_days: int
    holiday_cost_days: float
    holiday_days: int = 0

    @property
    def total_days(self) -> int:
        return self.required_leave_days + self.weekend_days + self.holiday_days


class Receipt(NamedTuple):
    """Everything computed for one date range."""

    start_date: datetime.date
    end_date: datetime.date
    category: UserCategory
    days: list[DayClassification]
    spans: list[Span]
    totals: Totals


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def normalize_range(
    start: datetime.date, end: datetime.date
) -> tuple[datetime.date, datetime.date]:
    """Return the range in ascending order (a reversed selection is swapped)."""
    return (end, start) if start > end else (start, end)


def classify(
    start: datetime.date,
    end: datetime.date,
    calendar: Mapping[datetime.date, HolidayRecord],
) -> list[DayClassification]:
    """Classify every date from *start* to *end* inclusive.

    A holiday wins over a weekend.  Raises :class:`InvalidRangeError` if
    *start* is after *end*.
    """
    if start > end:
        raise InvalidRangeError(start, end)

    days: list[DayClassification] = []
    for offset in range((end - start).days + 1):
        d = start + datetime.timedelta(days=offset)
        record = calendar.get(d)
        if record is not None:
            days.append(DayClassification(d, DayCategory.HOLIDAY, record.display_name, record.cost))
        elif d.weekday() in WEEKEND_DAYS:
            days.append(DayClassification(d, DayCategory.WEEKEND))
        else:
            days.append(DayClassification(d, DayCategory.WORKDAY))
    return days


def _close(
    first: DayClassification, last: DayClassification, labels: list[str], cost: float
) -> Span:
    return Span(
        start_date=first.date,
        end_date=last.date,
        category=first.category,
        label=last.label or first.category.title,
        total_cost=cost,
        labels=tuple(labels),
    )


def aggregate(days: Iterable[DayClassification]) -> list[Span]:
    """Collapse consecutive days of the same category into spans."""
    spans: list[Span] = []
    first: DayClassification | None = None
    last: DayClassification | None = None
    labels: list[str] = []
    cost = 0.0

    for day in days:
        if first is not None and last is not None and day.category is not first.category:
            spans.append(_close(first, last, labels, cost))
            first = None

        if first is None:
            first, labels, cost = day, [], 0.0
        last = day
        cost += day.cost
        if day.label and day.label not in labels:
            labels.append(day.label)

    if first is not None and last is not None:
        spans.append(_close(first, last, labels, cost))
    return spans


def summarize(days: Iterable[DayClassification]) -> Totals:
    """Count leave days, weekend days and holiday cost."""
    workdays = weekends = holidays = 0
    holiday_cost = 0.0
    for day in days:
        if day.category is DayCategory.WORKDAY:
            workdays += 1
        elif day.category is DayCategory.WEEKEND:
            weekends += 1
        else:
            holidays += 1
            holiday_cost += day.cost
    return Totals(
        required_leave_days=workdays,
        weekend_days=weekends,
        holiday_cost_days=holiday_cost,
        holiday_days=holidays,
    )


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------


class VacationCalculator:
    """Computes receipts for date ranges for one user category.

    Holiday calendars are resolved lazily, once per Gregorian year, and
    merged when a range crosses a year boundary.
    """

    def __init__(
        self,
        category: UserCategory | str = UserCategory.CITIZEN,
        *,
        source: ObservanceSource = israeli_observances,
        locale: str = "en",
    ):
        self.category = UserCategory.parse(category)
        self.source = source
        self.locale = locale
        self._calendars: dict[int, HolidayCalendar] = {}

    def calendar_for(self, year: int) -> HolidayCalendar:
        if year not in self._calendars:
            self._calendars[year] = resolve(
                year, self.category, source=self.source, locale=self.locale
            )
        return self._calendars[year]

    def calendar_between(self, start: datetime.date, end: datetime.date) -> HolidayCalendar:
        start, end = normalize_range(start, end)
        calendar = HolidayCalendar(category=self.category)
        for year in range(start.year, end.year + 1):
            calendar = calendar | self.calendar_for(year)
        return calendar

    def calculate(self, start: datetime.date, end: datetime.date) -> Receipt:
        start, end = normalize_range(start, end)
        days = classify(start, end, self.calendar_between(start, end))
        totals = summarize(days)
        logger.debug(
            "%s..%s (%s): %d leave days",
            start,
            end,
            self.category.value,
            totals.required_leave_days,
        )
        return Receipt(
            start_date=start,
            end_date=end,
            category=self.category,
            days=days,
            spans=aggregate(days),
            totals=totals,
        )


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

CATEGORY_TITLES: dict[UserCategory, str] = {
    UserCategory.CITIZEN: "Citizen",
    UserCategory.SOLDIER: "Soldier",
    UserCategory.CAREER_SOLDIER: "Career soldier",
}


def _fmt_day(d: datetime.date) -> str:
    return d.strftime("%a %d/%m/%Y")


def _fmt_cost(cost: float) -> str:
    return f"{cost:g}"


def format_span(span: Span) -> str:
    dates = _fmt_day(span.start_date)
    if span.end_date != span.start_date:
        dates += f" - {_fmt_day(span.end_date)}"
    kind = span.category.title
    if span.category is DayCategory.HOLIDAY:
        kind += f" ({span.label})"
        if span.total_cost:
            kind += f"  [cost {_fmt_cost(span.total_cost)}]"
    return f"  {dates:<29}  {kind}"


def format_receipt(receipt: Receipt) -> str:
    """Render a receipt with summary cards as plain text."""
    w = 64
    t = receipt.totals
    lines = [
        "=" * w,
        "  VACATION DAYS CALCULATOR",
        "=" * w,
        f"  Dates:             {receipt.start_date:%d/%m/%Y} -> {receipt.end_date:%d/%m/%Y}",
        f"  Category:          {CATEGORY_TITLES[receipt.category]}",
        f"  Leave days needed: {t.required_leave_days}",
        "",
        "  Receipt",
        "  " + "-" * (w - 2),
    ]
    lines.extend(format_span(s) for s in receipt.spans)
    lines.append("  " + "-" * (w - 2))
    lines.append(
        f"  Workday: {t.required_leave_days}   Weekend: {t.weekend_days}"
        f"   Holiday: {t.holiday_days}"
    )
    if t.holiday_cost_days:
        lines.append(f"  Holiday leave cost: {_fmt_cost(t.holiday_cost_days)}")
    lines.append("=" * w)
    return "\n".join(lines)


def format_calendar(calendar: HolidayCalendar, year: int) -> str:
    """List the holidays of *year* in *calendar* with their leave cost."""
    lines = [f"  Israeli holidays ({CATEGORY_TITLES[calendar.category]}) — {year}", ""]
    for d in calendar:
        if d.year != year:
            continue
        record = calendar[d]
        lines.append(
            f"    {d.strftime('%a, %b %d'):>12}  {record.display_name}"
            f"  (cost {_fmt_cost(record.cost)})"
        )
    return "\n".join(lines)


def span_to_dict(span: Span) -> dict[str, object]:
    return {
        "start_date": span.start_date.isoformat(),
        "end_date": span.end_date.isoformat(),
        "category": span.category.value,
        "label": span.label,
        "labels": list(span.labels),
        "days": span.days,
        "total_cost": span.total_cost,
    }


def receipt_to_dict(receipt: Receipt) -> dict[str, object]:
    t = receipt.totals
    return {
        "start_date": receipt.start_date.isoformat(),
        "end_date": receipt.end_date.isoformat(),
        "category": receipt.category.value,
        "spans": [span_to_dict(s) for s in receipt.spans],
        "totals": {
            "required_leave_days": t.required_leave_days,
            "weekend_days": t.weekend_days,
            "holiday_days": t.holiday_days,
            "holiday_cost_days": t.holiday_cost_days,
        },
        "days": days_to_dicts(receipt.days),
    }


def days_to_dicts(days: Sequence[DayClassification]) -> list[dict[str, object]]:
    return [
        {
            "date": d.date.isoformat(),
            "category": d.category.value,
            "label": d.label,
            "cost": d.cost,
        }
        for d in days
    ]
