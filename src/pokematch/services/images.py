from __future__ import annotations

import hashlib
from pathlib import Path

import requests

from .catalog import HttpClient


class ImageService:
    """Fetches card artwork over HTTP and keeps a copy on disk."""

    def __init__(self, cache_dir: Path, http: HttpClient | None = None, timeout: float = 10.0) -> None:
        self.cache_dir = cache_dir
        self._http: HttpClient = http if http is not None else requests.Session()
        self.timeout = timeout

    def cache_path(self, url: str) -> Path:
        digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:16]
        suffix = Path(url.split("?", 1)[0]).suffix or ".img"
        return self.cache_dir / f"{digest}{suffix}"

    def fetch(self, url: str) -> bytes | None:
        """Return the image bytes, or None when the download fails."""
        path = self.cache_path(url)
        if path.exists():
            return path.read_bytes()
        try:
            resp = self._http.get(url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.content
        except requests.RequestException:
            return None
        if not data:
            return None
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return data
