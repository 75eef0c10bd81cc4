from __future__ import annotations

import json
from pathlib import Path

import pytest

from pokematch.paths import get_paths
from pokematch.services.preferences import Preferences, PreferencesError, PreferencesService


def _service(path: Path) -> PreferencesService:
    return PreferencesService(path, schema_path=get_paths().schema_dir / "preferences.schema.json")


def test_defaults_written_on_first_run(tmp_path: Path) -> None:
    path = tmp_path / "userdata" / "preferences.json"
    svc = _service(path)
    assert svc.theme == "light"
    assert svc.prefs.last_difficulty == "easy"
    assert json.loads(path.read_text(encoding="utf-8"))["theme"] == "light"


def test_theme_toggle_persists(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    svc = _service(path)
    assert svc.toggle_theme() == "dark"
    assert _service(path).theme == "dark"
    assert svc.toggle_theme() == "light"
    assert _service(path).theme == "light"


def test_last_difficulty_persists(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    _service(path).set_last_difficulty("hard")
    assert _service(path).prefs.last_difficulty == "hard"
    with pytest.raises(PreferencesError):
        _service(path).set_last_difficulty("nightmare")  # type: ignore[arg-type]


def test_unknown_theme_rejected(tmp_path: Path) -> None:
    svc = _service(tmp_path / "preferences.json")
    with pytest.raises(PreferencesError):
        svc.set_theme("sepia")  # type: ignore[arg-type]
    assert svc.theme == "light"


def test_corrupt_file_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    path.write_text("{not json", encoding="utf-8")
    svc = _service(path)
    assert svc.theme == "light"
    assert json.loads(path.read_text(encoding="utf-8")) == Preferences().to_dict()


def test_invalid_values_are_repaired(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    path.write_text(json.dumps({"version": 1, "theme": "neon", "last_difficulty": "medium"}), encoding="utf-8")
    svc = _service(path)
    assert svc.theme == "light"
    assert svc.prefs.last_difficulty == "medium"
    assert json.loads(path.read_text(encoding="utf-8"))["theme"] == "light"


def test_non_object_file_is_rewritten(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    path.write_text(json.dumps(["dark"]), encoding="utf-8")
    svc = _service(path)
    assert svc.theme == "light"
    assert json.loads(path.read_text(encoding="utf-8")) == Preferences().to_dict()
