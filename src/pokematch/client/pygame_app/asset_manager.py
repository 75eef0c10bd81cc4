from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from pokematch.services.images import ImageService


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font


class AssetManager:
    def __init__(self, assets_dir: Path, images: ImageService) -> None:
        self.assets_dir = assets_dir
        self.images = images
        self._cache: dict[tuple[str, int, int], pygame.Surface] = {}

        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 40),
        )

    def _scaled(self, img: pygame.Surface, size: tuple[int, int] | None) -> pygame.Surface:
        if size is None:
            return img
        return pygame.transform.smoothscale(img, size)

    def _placeholder(self, size: tuple[int, int] | None) -> pygame.Surface:
        fallback = pygame.Surface(size or (64, 64))
        fallback.fill((200, 40, 200))
        return fallback

    def get_image(self, name: str, size: tuple[int, int] | None = None) -> pygame.Surface | None:
        """Load a bundled image from the assets directory, or None if it is missing."""
        w, h = size if size is not None else (0, 0)
        key = (name, w, h)
        if key in self._cache:
            return self._cache[key]

        path = self.assets_dir / name
        if not path.exists():
            return None
        try:
            img = pygame.image.load(path.as_posix()).convert_alpha()
        except pygame.error:
            return None
        img = self._scaled(img, size)
        self._cache[key] = img
        return img

    def is_loaded(self, url: str, size: tuple[int, int]) -> bool:
        return (url, size[0], size[1]) in self._cache

    def get_remote_image(self, url: str, size: tuple[int, int]) -> pygame.Surface:
        """Artwork by URL; falls back to a placeholder when the download fails."""
        key = (url, size[0], size[1])
        if key in self._cache:
            return self._cache[key]

        data = self.images.fetch(url)
        img: pygame.Surface | None = None
        if data is not None:
            try:
                img = pygame.image.load(io.BytesIO(data), url).convert_alpha()
            except pygame.error:
                img = None
        surf = self._scaled(img, size) if img is not None else self._placeholder(size)
        self._cache[key] = surf
        return surf
