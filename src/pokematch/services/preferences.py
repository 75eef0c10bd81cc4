from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from pokematch.engine.types import DIFFICULTY_PAIRS, Difficulty, Theme

THEMES: tuple[Theme, ...] = ("light", "dark")


class PreferencesError(RuntimeError):
    pass


@dataclass
class Preferences:
    version: int = 1
    theme: Theme = "light"
    last_difficulty: Difficulty = "easy"

    @staticmethod
    def from_dict(d: Mapping[str, object]) -> "Preferences":
        try:
            version = int(d.get("version", 1))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            version = 1
        theme = d.get("theme", "light")
        if theme not in THEMES:
            theme = "light"
        difficulty = d.get("last_difficulty", "easy")
        if difficulty not in DIFFICULTY_PAIRS:
            difficulty = "easy"
        return Preferences(
            version=version,
            theme=theme,  # type: ignore[arg-type]
            last_difficulty=difficulty,  # type: ignore[arg-type]
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "theme": self.theme,
            "last_difficulty": self.last_difficulty,
        }


class PreferencesService:
    def __init__(self, path: Path, schema_path: Path | None = None) -> None:
        self._path = path
        self._validator = self._load_validator(schema_path)
        self.prefs = self._load_or_create()

    @staticmethod
    def _load_validator(schema_path: Path | None) -> Draft202012Validator | None:
        if schema_path is None or not schema_path.exists():
            return None
        try:
            schema = json.loads(schema_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise PreferencesError(f"Invalid JSON in {schema_path}: {e}") from e
        return Draft202012Validator(schema)

    def _load_or_create(self) -> Preferences:
        if not self._path.exists():
            prefs = Preferences()
            self._write(prefs)
            return prefs
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            raw = None
        if not isinstance(raw, dict):
            # A corrupt file is replaced rather than blocking boot.
            prefs = Preferences()
            self._write(prefs)
            return prefs
        prefs = Preferences.from_dict(raw)
        if self._validator is not None and not self._validator.is_valid(raw):
            self._write(prefs)
        return prefs

    def _write(self, prefs: Preferences) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(prefs.to_dict(), indent=2), encoding="utf-8")

    def save(self) -> None:
        self._write(self.prefs)

    @property
    def theme(self) -> Theme:
        return self.prefs.theme

    def set_theme(self, theme: Theme) -> None:
        if theme not in THEMES:
            raise PreferencesError(f"Unknown theme: {theme}")
        self.prefs.theme = theme
        self.save()

    def toggle_theme(self) -> Theme:
        new_theme: Theme = "light" if self.prefs.theme == "dark" else "dark"
        self.set_theme(new_theme)
        return new_theme

    def set_last_difficulty(self, difficulty: Difficulty) -> None:
        if difficulty not in DIFFICULTY_PAIRS:
            raise PreferencesError(f"Unknown difficulty: {difficulty}")
        self.prefs.last_difficulty = difficulty
        self.save()
