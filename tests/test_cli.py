from __future__ import annotations

import json
import pathlib

from typer.testing import CliRunner

from hofshli.cli import app

runner = CliRunner()


def _settings(tmp_path: pathlib.Path) -> str:
    return str(tmp_path / "prefs.json")


class TestCalculateCommand:
    def test_calculate_basic(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(
            app, ["calculate", "2025-01-05", "2025-01-11", "--settings", _settings(tmp_path)]
        )
        assert result.exit_code == 0
        assert "VACATION DAYS CALCULATOR" in result.output
        assert "Leave days needed: 5" in result.output
        assert "Category:          Citizen" in result.output

    def test_calculate_reversed_dates(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(
            app, ["calculate", "2025-01-11", "2025-01-05", "--settings", _settings(tmp_path)]
        )
        assert result.exit_code == 0
        assert "Leave days needed: 5" in result.output
        assert "05/01/2025 -> 11/01/2025" in result.output

    def test_calculate_single_day(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(app, ["calculate", "2025-01-04", "--settings", _settings(tmp_path)])
        assert result.exit_code == 0
        assert "Leave days needed: 0" in result.output
        assert "Weekend: 1" in result.output

    def test_calculate_json_output(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(
            app,
            [
                "calculate",
                "2025-04-12",
                "2025-04-19",
                "--category",
                "soldier",
                "--json",
                "--settings",
                _settings(tmp_path),
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["category"] == "soldier"
        assert data["totals"]["required_leave_days"] == 4
        assert data["totals"]["holiday_cost_days"] == 4.0
        assert [s["category"] for s in data["spans"]] == ["holiday", "workday", "holiday"]

    def test_calculate_hebrew_labels(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(
            app,
            ["calculate", "2025-05-01", "--locale", "he", "--settings", _settings(tmp_path)],
        )
        assert result.exit_code == 0
        assert "יום העצמאות" in result.output

    def test_calculate_uses_saved_category(self, tmp_path: pathlib.Path) -> None:
        settings = _settings(tmp_path)
        runner.invoke(app, ["category", "kevah", "--settings", settings])
        result = runner.invoke(app, ["calculate", "2025-06-01", "--settings", settings])
        assert result.exit_code == 0
        assert "Career soldier" in result.output
        assert "Holiday (Erev Shavuot)" in result.output

    def test_calculate_invalid_date(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(app, ["calculate", "05/01/2025", "--settings", _settings(tmp_path)])
        assert result.exit_code != 0

    def test_calculate_invalid_category(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(
            app,
            ["calculate", "2025-01-05", "--category", "reservist", "--settings", _settings(tmp_path)],
        )
        assert result.exit_code == 1
        assert "Invalid category" in result.output

    def test_calculate_invalid_locale(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(
            app, ["calculate", "2025-01-05", "--locale", "fr", "--settings", _settings(tmp_path)]
        )
        assert result.exit_code == 1
        assert "Invalid locale" in result.output


class TestHolidaysCommand:
    def test_holidays_citizen(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(
            app, ["holidays", "--year", "2025", "--settings", _settings(tmp_path)]
        )
        assert result.exit_code == 0
        assert "Israeli holidays (Citizen)" in result.output
        assert "Yom HaAtzmaut" in result.output
        assert "Erev Pesach" not in result.output

    def test_holidays_soldier(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(
            app,
            ["holidays", "--year", "2025", "--category", "soldier", "--settings", _settings(tmp_path)],
        )
        assert result.exit_code == 0
        assert "Erev Pesach  (cost 1)" in result.output
        assert "Erev Sukkot  (cost 0.5)" in result.output

    def test_holidays_default_year(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(app, ["holidays", "--settings", _settings(tmp_path)])
        assert result.exit_code == 0
        assert "Israeli holidays" in result.output


class TestCategoryCommand:
    def test_show_default(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(app, ["category", "--settings", _settings(tmp_path)])
        assert result.exit_code == 0
        assert "citizen (Citizen)" in result.output

    def test_set_and_show(self, tmp_path: pathlib.Path) -> None:
        settings = _settings(tmp_path)
        result = runner.invoke(app, ["category", "soldier", "--settings", settings])
        assert result.exit_code == 0
        assert "Saved category: soldier" in result.output
        result = runner.invoke(app, ["category", "--settings", settings])
        assert "soldier (Soldier)" in result.output

    def test_set_invalid(self, tmp_path: pathlib.Path) -> None:
        settings = _settings(tmp_path)
        result = runner.invoke(app, ["category", "general", "--settings", settings])
        assert result.exit_code == 1
        assert "Invalid category" in result.output
        assert not pathlib.Path(settings).exists()

    def test_settings_from_env(self, tmp_path: pathlib.Path) -> None:
        settings = _settings(tmp_path)
        result = runner.invoke(app, ["category", "kevah"], env={"HOFSHLI_SETTINGS": settings})
        assert result.exit_code == 0
        assert json.loads(pathlib.Path(settings).read_text()) == {"user_type": "kevah"}


class TestVerbose:
    def test_verbose_flag(self, tmp_path: pathlib.Path) -> None:
        result = runner.invoke(
            app, ["--verbose", "calculate", "2025-01-05", "--settings", _settings(tmp_path)]
        )
        assert result.exit_code == 0
