"""Persisted user preferences.

The only preference is the user category, stored as a JSON object under a
single key.  The CLI loads it at startup and saves it when it changes; the
calculator itself only ever receives an explicit category.
"""

from __future__ import annotations

import json
import logging
import os
import pathlib

import typer

from hofshli.resolver import UserCategory

logger = logging.getLogger(__name__)

APP_NAME = "hofshli"
PREFERENCE_KEY = "user_type"
SETTINGS_ENV = "HOFSHLI_SETTINGS"


def default_settings_path() -> pathlib.Path:
    """``$HOFSHLI_SETTINGS`` if set, else ``preferences.json`` in the app dir."""
    override = os.environ.get(SETTINGS_ENV)
    if override:
        return pathlib.Path(override)
    return pathlib.Path(typer.get_app_dir(APP_NAME)) / "preferences.json"


class PreferenceStore:
    """Reads and writes the user category preference file."""

    def __init__(self, path: str | pathlib.Path | None = None):
        self.path = pathlib.Path(path) if path is not None else default_settings_path()

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring preferences file %s: not a JSON object", self.path)
            return {}
        return data

    def load_category(self) -> UserCategory:
        """The stored category, or ``CITIZEN`` when nothing valid is stored."""
        value = self._read().get(PREFERENCE_KEY)
        if value is None:
            return UserCategory.CITIZEN
        return UserCategory.parse(value)  # type: ignore[arg-type]

    def save_category(self, category: UserCategory) -> None:
        data = self._read()
        data[PREFERENCE_KEY] = category.value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        logger.debug("Saved %s=%s to %s", PREFERENCE_KEY, category.value, self.path)
