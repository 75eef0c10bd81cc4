from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Mapping, Protocol, Sequence

import requests
from jsonschema import Draft202012Validator

from pokematch.engine.types import Catalog, CatalogEntry

DEFAULT_API_URL = "https://pokeapi.co/api/v2"
DEFAULT_LIMIT = 1500
# Higher ids in the listing are alternate forms with no official artwork.
DEFAULT_MAX_ID = 1025
MAX_PAGES = 20

_ID_FROM_URL = re.compile(r"/pokemon/(\d+)/")


class CatalogError(RuntimeError):
    pass


class HttpClient(Protocol):
    def get(self, url: str, *, timeout: float) -> Any: ...


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CatalogError(f"Missing schema file: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise CatalogError("\n".join(lines))


def id_from_url(url: str) -> int | None:
    m = _ID_FROM_URL.search(url)
    if m is None:
        return None
    return int(m.group(1))


def parse_listing(results: Sequence[Mapping[str, object]], max_id: int = DEFAULT_MAX_ID) -> list[CatalogEntry]:
    """Turn listing rows into catalog entries.

    Rows whose URL carries no id, or an id outside 1..max_id, are dropped.
    The first row wins when an id repeats.
    """
    out: list[CatalogEntry] = []
    seen: set[int] = set()
    for row in results:
        name = row.get("name")
        url = row.get("url")
        if not isinstance(name, str) or not isinstance(url, str):
            continue
        item_id = id_from_url(url)
        if item_id is None or item_id <= 0 or item_id > max_id:
            continue
        if item_id in seen:
            continue
        seen.add(item_id)
        out.append(CatalogEntry(id=item_id, name=name))
    return out


class CatalogService:
    def __init__(
        self,
        schema_dir: Path,
        base_url: str = DEFAULT_API_URL,
        limit: int = DEFAULT_LIMIT,
        max_id: int = DEFAULT_MAX_ID,
        http: HttpClient | None = None,
        timeout: float = 15.0,
    ) -> None:
        self._schema_dir = schema_dir
        self.base_url = base_url.rstrip("/")
        self.limit = limit
        self.max_id = max_id
        self._http: HttpClient = http if http is not None else requests.Session()
        self.timeout = timeout

    def listing_url(self) -> str:
        return f"{self.base_url}/pokemon?limit={self.limit}"

    def _get_page(self, url: str) -> object:
        try:
            resp = self._http.get(url, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise CatalogError(f"Could not fetch {url}: {e}") from e
        except ValueError as e:
            raise CatalogError(f"Invalid JSON from {url}: {e}") from e

    def fetch_pages(self) -> list[dict[str, object]]:
        schema = _load_json(self._schema_dir / "catalog_listing.schema.json")
        pages: list[dict[str, object]] = []
        url: str | None = self.listing_url()
        while url is not None:
            if len(pages) >= MAX_PAGES:
                raise CatalogError(f"Listing did not end after {MAX_PAGES} pages.")
            raw = self._get_page(url)
            validate_json(raw, schema, context=url)
            if not isinstance(raw, dict):
                raise CatalogError(f"Listing page from {url} must be an object")
            pages.append(raw)
            nxt = raw.get("next")
            url = nxt if isinstance(nxt, str) and nxt else None
        return pages

    def load_catalog(self) -> Catalog:
        rows: list[Mapping[str, object]] = []
        for page in self.fetch_pages():
            results = page.get("results")
            if isinstance(results, list):
                rows.extend(r for r in results if isinstance(r, dict))
        entries = parse_listing(rows, max_id=self.max_id)
        if not entries:
            raise CatalogError("Catalog listing contained no usable entries.")
        return Catalog.of(entries)
