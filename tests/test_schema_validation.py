from __future__ import annotations

import json

from jsonschema import Draft202012Validator

from pokematch.paths import get_paths


def test_bundled_schemas_are_valid() -> None:
    paths = get_paths()
    files = sorted(paths.schema_dir.glob("*.schema.json"))
    assert [f.name for f in files] == ["catalog_listing.schema.json", "preferences.schema.json"]
    for f in files:
        Draft202012Validator.check_schema(json.loads(f.read_text(encoding="utf-8")))
