from __future__ import annotations

import datetime

import pytest

from hofshli.holidays import ObservanceKind, display_name, hebrew_name, israeli_observances


def _by_name(year: int) -> dict[str, datetime.date]:
    return {o.name: o.date for o in israeli_observances(year)}


class TestIsraeliObservances:
    def test_sorted_and_within_year(self) -> None:
        observances = israeli_observances(2025)
        dates = [o.date for o in observances]
        assert dates == sorted(dates)
        assert all(d.year == 2025 for d in dates)

    def test_cached_per_year(self) -> None:
        assert israeli_observances(2025) is israeli_observances(2025)

    def test_pesach_2025(self) -> None:
        names = _by_name(2025)
        assert names["Erev Pesach"] == datetime.date(2025, 4, 12)
        assert names["Pesach I"] == datetime.date(2025, 4, 13)
        assert names["Pesach II"] == datetime.date(2025, 4, 14)
        assert names["Pesach VI"] == datetime.date(2025, 4, 18)
        assert names["Pesach VII"] == datetime.date(2025, 4, 19)

    def test_israel_schedule_has_no_second_festival_days(self) -> None:
        names = _by_name(2025)
        assert "Pesach VIII" not in names
        assert "Shavuot II" not in names

    def test_autumn_festivals_2025(self) -> None:
        names = _by_name(2025)
        assert names["Erev Rosh Hashana"] == datetime.date(2025, 9, 22)
        assert names["Rosh Hashana"] == datetime.date(2025, 9, 23)
        assert names["Rosh Hashana II"] == datetime.date(2025, 9, 24)
        assert names["Yom Kippur"] == datetime.date(2025, 10, 2)
        assert names["Sukkot I"] == datetime.date(2025, 10, 7)
        assert names["Sukkot VII (Hoshana Raba)"] == datetime.date(2025, 10, 13)
        assert names["Shmini Atzeret"] == datetime.date(2025, 10, 14)

    def test_shavuot_and_lag_baomer_2025(self) -> None:
        names = _by_name(2025)
        assert names["Lag BaOmer"] == datetime.date(2025, 5, 16)
        assert names["Erev Shavuot"] == datetime.date(2025, 6, 1)
        assert names["Shavuot"] == datetime.date(2025, 6, 2)

    def test_purim_in_adar_ii_of_leap_year(self) -> None:
        # 5784 is a leap year
        assert _by_name(2024)["Purim"] == datetime.date(2024, 3, 24)
        assert _by_name(2025)["Purim"] == datetime.date(2025, 3, 14)

    def test_yom_haatzmaut_saturday_moves_to_thursday(self) -> None:
        # 5 Iyar 5785 is a Saturday
        names = _by_name(2025)
        assert names["Yom HaAtzmaut"] == datetime.date(2025, 5, 1)
        assert names["Yom HaZikaron"] == datetime.date(2025, 4, 30)

    def test_yom_haatzmaut_monday_moves_to_tuesday(self) -> None:
        # 5 Iyar 5784 is a Monday
        assert _by_name(2024)["Yom HaAtzmaut"] == datetime.date(2024, 5, 14)

    def test_yom_hashoah_friday_moves_to_thursday(self) -> None:
        assert _by_name(2025)["Yom HaShoah"] == datetime.date(2025, 4, 24)

    def test_summer_fasts_2025(self) -> None:
        names = _by_name(2025)
        assert names["Tzom Tammuz"] == datetime.date(2025, 7, 13)
        assert names["Tish'a B'Av"] == datetime.date(2025, 8, 3)
        assert names["Erev Tish'a B'Av"] == datetime.date(2025, 8, 2)

    def test_chanukah_spans_year_boundary(self) -> None:
        chanukah = [o for o in israeli_observances(2025) if o.name.startswith("Chanukah")]
        # days 7-8 of 5785 plus all eight days of 5786
        assert len(chanukah) == 10
        assert chanukah[0].date == datetime.date(2025, 1, 1)
        first_5786 = next(o for o in chanukah if o.name == "Chanukah: Day 1")
        assert first_5786.date == datetime.date(2025, 12, 15)

    def test_modern_days_only_after_they_were_instituted(self) -> None:
        assert "Yom HaAtzmaut" not in _by_name(1940)
        assert "Yom HaAliyah" not in _by_name(2010)
        assert "Yom HaAliyah" in _by_name(2025)

    def test_kinds(self) -> None:
        kinds = {o.name: o.kinds for o in israeli_observances(2025)}
        assert ObservanceKind.YOM_TOV in kinds["Yom Kippur"]
        assert ObservanceKind.MAJOR_FAST in kinds["Yom Kippur"]
        assert kinds["Erev Pesach"] == frozenset({ObservanceKind.EREV})
        assert kinds["Pesach II"] == frozenset({ObservanceKind.CHOL_HAMOED})
        assert kinds["Yom HaAtzmaut"] == frozenset({ObservanceKind.MODERN_HOLIDAY})


class TestDisplayNames:
    def test_english_is_canonical(self) -> None:
        assert display_name("Purim") == "Purim"

    def test_hebrew(self) -> None:
        assert display_name("Purim", "he") == "פורים"
        assert hebrew_name("Yom HaAtzmaut") == "יום העצמאות"

    def test_hebrew_chanukah_day(self) -> None:
        assert hebrew_name("Chanukah: Day 3") == "חנוכה: יום 3"

    def test_unknown_name_falls_back(self) -> None:
        assert hebrew_name("Something Else") == "Something Else"

    def test_unknown_locale(self) -> None:
        with pytest.raises(KeyError, match="Unknown locale"):
            display_name("Purim", "fr")
