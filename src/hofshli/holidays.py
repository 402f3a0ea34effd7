"""Israeli observances computed from Hebrew-calendar rules.

Each observance is produced for the Israel schedule: a single Yom Tov day
for Pesach, Shavuot and Sukkot, Chol HaMoed running through day VI, and no
second festival days.  Modern state days apply the official postponement
rules, e.g. Yom HaAtzmaut never falls on Friday, Saturday or Monday.

Hebrew <-> Gregorian conversion is delegated to :mod:`convertdate.hebrew`.
"""

from __future__ import annotations

import datetime
import enum
from collections.abc import Callable, Iterable
from functools import lru_cache
from typing import NamedTuple

from convertdate import hebrew

# Month numbers as used by convertdate (Nisan = 1, Adar II = 13).
NISAN = 1
IYYAR = 2
SIVAN = 3
TAMMUZ = 4
AV = 5
ELUL = 6
TISHRI = 7
HESHVAN = 8
KISLEV = 9
TEVETH = 10
SHEVAT = 11
ADAR = 12
VEADAR = 13

# Offset between the Gregorian year and the Hebrew year starting in its autumn.
_HEBREW_YEAR_OFFSET = 3761

MONDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = 0, 3, 4, 5, 6


class ObservanceKind(enum.Enum):
    """What kind of day an observance is."""

    YOM_TOV = "yom_tov"
    EREV = "erev"
    CHOL_HAMOED = "chol_hamoed"
    MINOR_HOLIDAY = "minor_holiday"
    MAJOR_FAST = "major_fast"
    MINOR_FAST = "minor_fast"
    MODERN_HOLIDAY = "modern_holiday"


class Observance(NamedTuple):
    """A dated observance with its kinds."""

    date: datetime.date
    name: str
    kinds: frozenset[ObservanceKind]


ObservanceSource = Callable[[int], Iterable[Observance]]
"""Signature: source(gregorian_year) -> observances dated in that year."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _hebrew_date(hyear: int, month: int, day: int) -> datetime.date:
    """Gregorian date of *day* of *month* in Hebrew year *hyear*."""
    return datetime.date(*hebrew.to_gregorian(hyear, month, day))


def _adar(hyear: int) -> int:
    """The Adar in which Purim falls (Adar II in a leap year)."""
    return VEADAR if hebrew.leap(hyear) else ADAR


def _shift(d: datetime.date, moves: dict[int, int]) -> datetime.date:
    """Move *d* by ``moves[weekday]`` days when its weekday has a rule."""
    return d + datetime.timedelta(days=moves.get(d.weekday(), 0))


def _obs(d: datetime.date, name: str, *kinds: ObservanceKind) -> Observance:
    return Observance(d, name, frozenset(kinds))


def _yom_haatzmaut(hyear: int) -> datetime.date:
    """Observed Independence Day for *hyear*.

    5 Iyar on Friday or Saturday moves back to Thursday.  Since 5764 a
    Monday 5 Iyar moves to Tuesday so Yom HaZikaron does not follow Shabbat.
    """
    d = _hebrew_date(hyear, IYYAR, 5)
    moves = {FRIDAY: -1, SATURDAY: -2}
    if hyear >= 5764:
        moves[MONDAY] = 1
    return _shift(d, moves)


# name, month, day, first Hebrew year observed, weekday moves
_MODERN_DAYS: list[tuple[str, int, int, int, dict[int, int]]] = [
    ("Yom HaAliyah School Observance", HESHVAN, 7, 5777, {}),
    ("Yitzhak Rabin Memorial Day", HESHVAN, 12, 5758, {FRIDAY: -1}),
    ("Sigd", HESHVAN, 29, 5769, {}),
    ("Ben-Gurion Day", KISLEV, 6, 5737, {FRIDAY: 2, SATURDAY: 1}),
    ("Hebrew Language Day", TEVETH, 21, 5773, {SATURDAY: 1}),
    ("Family Day", SHEVAT, 30, 5750, {}),
    ("Yom HaAliyah", NISAN, 10, 5777, {}),
    ("Herzl Day", IYYAR, 10, 5764, {SATURDAY: 1}),
    ("Yom Yerushalayim", IYYAR, 28, 5728, {}),
    ("Jabotinsky Day", TAMMUZ, 29, 5765, {SATURDAY: 1}),
]


def _festivals(hyear: int) -> list[Observance]:
    """Biblical festivals, fasts and minor holidays of Hebrew year *hyear*."""
    K = ObservanceKind
    out = [
        _obs(_hebrew_date(hyear, TISHRI, 1), "Rosh Hashana", K.YOM_TOV),
        _obs(_hebrew_date(hyear, TISHRI, 2), "Rosh Hashana II", K.YOM_TOV),
        _obs(_shift(_hebrew_date(hyear, TISHRI, 3), {SATURDAY: 1}), "Tzom Gedaliah", K.MINOR_FAST),
        _obs(_hebrew_date(hyear, TISHRI, 9), "Erev Yom Kippur", K.EREV),
        _obs(_hebrew_date(hyear, TISHRI, 10), "Yom Kippur", K.YOM_TOV, K.MAJOR_FAST),
        _obs(_hebrew_date(hyear, TISHRI, 14), "Erev Sukkot", K.EREV),
        _obs(_hebrew_date(hyear, TISHRI, 15), "Sukkot I", K.YOM_TOV),
    ]
    for i, numeral in enumerate(["II", "III", "IV", "V", "VI"], start=16):
        out.append(_obs(_hebrew_date(hyear, TISHRI, i), f"Sukkot {numeral}", K.CHOL_HAMOED))
    out.append(_obs(_hebrew_date(hyear, TISHRI, 21), "Sukkot VII (Hoshana Raba)", K.CHOL_HAMOED))
    out.append(_obs(_hebrew_date(hyear, TISHRI, 22), "Shmini Atzeret", K.YOM_TOV))

    chanukah = _hebrew_date(hyear, KISLEV, 25)
    for n in range(8):
        out.append(
            _obs(chanukah + datetime.timedelta(days=n), f"Chanukah: Day {n + 1}", K.MINOR_HOLIDAY)
        )

    out.append(_obs(_hebrew_date(hyear, TEVETH, 10), "Asara B'Tevet", K.MINOR_FAST))
    out.append(_obs(_hebrew_date(hyear, SHEVAT, 15), "Tu BiShvat", K.MINOR_HOLIDAY))

    adar = _adar(hyear)
    out.append(
        _obs(_shift(_hebrew_date(hyear, adar, 13), {SATURDAY: -2}), "Ta'anit Esther", K.MINOR_FAST)
    )
    out.append(_obs(_hebrew_date(hyear, adar, 14), "Purim", K.MINOR_HOLIDAY))
    out.append(_obs(_hebrew_date(hyear, adar, 15), "Shushan Purim", K.MINOR_HOLIDAY))

    out.append(_obs(_hebrew_date(hyear, NISAN, 14), "Erev Pesach", K.EREV))
    out.append(_obs(_hebrew_date(hyear, NISAN, 15), "Pesach I", K.YOM_TOV))
    for i, numeral in enumerate(["II", "III", "IV", "V", "VI"], start=16):
        out.append(_obs(_hebrew_date(hyear, NISAN, i), f"Pesach {numeral}", K.CHOL_HAMOED))
    out.append(_obs(_hebrew_date(hyear, NISAN, 21), "Pesach VII", K.YOM_TOV))

    out.append(_obs(_hebrew_date(hyear, IYYAR, 14), "Pesach Sheni", K.MINOR_HOLIDAY))
    out.append(_obs(_hebrew_date(hyear, IYYAR, 18), "Lag BaOmer", K.MINOR_HOLIDAY))
    out.append(_obs(_hebrew_date(hyear, SIVAN, 5), "Erev Shavuot", K.EREV))
    out.append(_obs(_hebrew_date(hyear, SIVAN, 6), "Shavuot", K.YOM_TOV))

    out.append(
        _obs(_shift(_hebrew_date(hyear, TAMMUZ, 17), {SATURDAY: 1}), "Tzom Tammuz", K.MINOR_FAST)
    )
    tisha_bav = _shift(_hebrew_date(hyear, AV, 9), {SATURDAY: 1})
    out.append(_obs(tisha_bav - datetime.timedelta(days=1), "Erev Tish'a B'Av", K.EREV))
    out.append(_obs(tisha_bav, "Tish'a B'Av", K.MAJOR_FAST))
    out.append(_obs(_hebrew_date(hyear, AV, 15), "Tu B'Av", K.MINOR_HOLIDAY))

    out.append(_obs(_hebrew_date(hyear, ELUL, 1), "Rosh Hashana LaBehemot", K.MINOR_HOLIDAY))
    out.append(_obs(_hebrew_date(hyear, ELUL, 29), "Erev Rosh Hashana", K.EREV))
    return out


def _modern_holidays(hyear: int) -> list[Observance]:
    """State observances of Hebrew year *hyear*."""
    modern = ObservanceKind.MODERN_HOLIDAY
    out: list[Observance] = []

    if hyear >= 5708:
        atzmaut = _yom_haatzmaut(hyear)
        out.append(_obs(atzmaut - datetime.timedelta(days=1), "Yom HaZikaron", modern))
        out.append(_obs(atzmaut, "Yom HaAtzmaut", modern))

    if hyear >= 5711:
        shoah = _shift(_hebrew_date(hyear, NISAN, 27), {FRIDAY: -1, SUNDAY: 1})
        out.append(_obs(shoah, "Yom HaShoah", modern))

    for name, month, day, since, moves in _MODERN_DAYS:
        if hyear >= since:
            out.append(_obs(_shift(_hebrew_date(hyear, month, day), moves), name, modern))
    return out


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def israeli_observances(year: int) -> tuple[Observance, ...]:
    """All observances whose Gregorian date falls in *year*, sorted by date.

    A Gregorian year overlaps two Hebrew years: the one that began the
    previous autumn and the one that begins in its own autumn.
    """
    found: list[Observance] = []
    for hyear in (year + _HEBREW_YEAR_OFFSET - 1, year + _HEBREW_YEAR_OFFSET):
        found.extend(_festivals(hyear))
        found.extend(_modern_holidays(hyear))
    # sorted() is stable, so same-day observances keep generation order
    return tuple(sorted((o for o in found if o.date.year == year), key=lambda o: o.date))


HEBREW_NAMES: dict[str, str] = {
    "Rosh Hashana": "ראש השנה",
    "Rosh Hashana II": "ראש השנה ב׳",
    "Erev Rosh Hashana": "ערב ראש השנה",
    "Tzom Gedaliah": "צום גדליה",
    "Erev Yom Kippur": "ערב יום כפור",
    "Yom Kippur": "יום כפור",
    "Erev Sukkot": "ערב סוכות",
    "Sukkot I": "סוכות א׳",
    "Sukkot II": "סוכות ב׳ (חול המועד)",
    "Sukkot III": "סוכות ג׳ (חול המועד)",
    "Sukkot IV": "סוכות ד׳ (חול המועד)",
    "Sukkot V": "סוכות ה׳ (חול המועד)",
    "Sukkot VI": "סוכות ו׳ (חול המועד)",
    "Sukkot VII (Hoshana Raba)": "הושענא רבה",
    "Shmini Atzeret": "שמיני עצרת",
    "Asara B'Tevet": "עשרה בטבת",
    "Tu BiShvat": "ט״ו בשבט",
    "Ta'anit Esther": "תענית אסתר",
    "Purim": "פורים",
    "Shushan Purim": "שושן פורים",
    "Erev Pesach": "ערב פסח",
    "Pesach I": "פסח א׳",
    "Pesach II": "פסח ב׳ (חול המועד)",
    "Pesach III": "פסח ג׳ (חול המועד)",
    "Pesach IV": "פסח ד׳ (חול המועד)",
    "Pesach V": "פסח ה׳ (חול המועד)",
    "Pesach VI": "פסח ו׳ (חול המועד)",
    "Pesach VII": "שביעי של פסח",
    "Pesach Sheni": "פסח שני",
    "Lag BaOmer": "ל״ג בעומר",
    "Erev Shavuot": "ערב שבועות",
    "Shavuot": "שבועות",
    "Tzom Tammuz": "צום תמוז",
    "Erev Tish'a B'Av": "ערב תשעה באב",
    "Tish'a B'Av": "תשעה באב",
    "Tu B'Av": "ט״ו באב",
    "Rosh Hashana LaBehemot": "ראש השנה למעשר בהמה",
    "Yom HaShoah": "יום השואה",
    "Yom HaZikaron": "יום הזיכרון",
    "Yom HaAtzmaut": "יום העצמאות",
    "Yom Yerushalayim": "יום ירושלים",
    "Yom HaAliyah": "יום העלייה",
    "Yom HaAliyah School Observance": "יום העלייה במערכת החינוך",
    "Yitzhak Rabin Memorial Day": "יום הזיכרון ליצחק רבין",
    "Sigd": "סיגד",
    "Ben-Gurion Day": "יום בן־גוריון",
    "Hebrew Language Day": "יום השפה העברית",
    "Family Day": "יום המשפחה",
    "Herzl Day": "יום הרצל",
    "Jabotinsky Day": "יום ז׳בוטינסקי",
}

LOCALES: dict[str, str] = {
    "en": "English",
    "he": "Hebrew",
}


def hebrew_name(name: str) -> str:
    """Hebrew rendering of *name*; Chanukah days and unknown names fall back."""
    if name.startswith("Chanukah: Day "):
        return f"חנוכה: יום {name.rsplit(' ', 1)[-1]}"
    return HEBREW_NAMES.get(name, name)


def display_name(name: str, locale: str = "en") -> str:
    """Render the canonical English *name* for *locale*.

    Raises ``KeyError`` if the locale is not supported.
    """
    if locale not in LOCALES:
        supported = ", ".join(sorted(LOCALES))
        msg = f"Unknown locale {locale!r}. Supported: {supported}"
        raise KeyError(msg)
    return hebrew_name(name) if locale == "he" else name
