"""Hofshli: vacation days calculator for Israel.

Count how many leave days a date range really takes once weekends and
holidays are accounted for, and group the range into a receipt of
contiguous workday, weekend and holiday spans.
"""

from hofshli.calculator import (
    DayCategory,
    DayClassification,
    InvalidRangeError,
    Receipt,
    Span,
    Totals,
    VacationCalculator,
    aggregate,
    classify,
    normalize_range,
    summarize,
)
from hofshli.holidays import Observance, ObservanceKind, israeli_observances
from hofshli.resolver import HolidayCalendar, HolidayRecord, UserCategory, resolve, resolve_range

__all__ = [
    "DayCategory",
    "DayClassification",
    "HolidayCalendar",
    "HolidayRecord",
    "InvalidRangeError",
    "Observance",
    "ObservanceKind",
    "Receipt",
    "Span",
    "Totals",
    "UserCategory",
    "VacationCalculator",
    "aggregate",
    "classify",
    "israeli_observances",
    "normalize_range",
    "resolve",
    "resolve_range",
    "summarize",
]
