from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame  # type: ignore[import-not-found]

from pokematch.engine.types import Catalog, Difficulty
from pokematch.paths import Paths
from pokematch.services.catalog import CatalogService
from pokematch.services.preferences import PreferencesService
from pokematch.services.telemetry import TelemetryService

from .asset_manager import AssetManager
from .scene_base import Scene
from .theme import Palette, palette_for


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    catalog_service: CatalogService
    telemetry: TelemetryService
    difficulty: Optional[Difficulty] = None
    seed: Optional[int] = None

    # Loaded at boot
    catalog: Optional[Catalog] = None
    preferences: Optional[PreferencesService] = None

    @property
    def palette(self) -> Palette:
        prefs = self.preferences
        return palette_for(prefs.theme if prefs is not None else "light")

    def toggle_theme(self) -> None:
        prefs = self.preferences
        if prefs is None:
            return
        theme = prefs.toggle_theme()
        self.telemetry.log("theme_changed", {"theme": theme})


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene, fps: int = 60) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True
        self.fps = fps

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(self.fps) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        return 0
