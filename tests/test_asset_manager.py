from __future__ import annotations

import os
from pathlib import Path

import requests

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from pokematch.client.pygame_app.asset_manager import AssetManager
from pokematch.engine.types import image_url
from pokematch.services.images import ImageService


class OfflineHttp:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def get(self, url: str, *, timeout: float) -> object:
        self.calls.append(url)
        raise requests.ConnectionError(url)


def test_failed_artwork_is_cached_as_placeholder(tmp_path: Path) -> None:
    http = OfflineHttp()
    assets = AssetManager(tmp_path / "assets", ImageService(tmp_path / "cache", http=http))
    url = image_url(25)

    assert not assets.is_loaded(url, (90, 120))
    surf = assets.get_remote_image(url, (90, 120))
    assert surf.get_size() == (90, 120)
    assert assets.is_loaded(url, (90, 120))
    assert not assets.is_loaded(url, (60, 80))

    # a second lookup is served from memory
    assets.get_remote_image(url, (90, 120))
    assert http.calls == [url]


def test_missing_bundled_image_returns_none(tmp_path: Path) -> None:
    assets = AssetManager(tmp_path, ImageService(tmp_path / "cache", http=OfflineHttp()))
    assert assets.get_image("ui/card_back.png", size=(90, 120)) is None
