from __future__ import annotations

import traceback

import pygame  # type: ignore[import-not-found]

from pokematch.services.catalog import CatalogError
from pokematch.services.preferences import PreferencesError, PreferencesService
from ..app import GameContext
from ..scene_base import SceneBase, SceneTransition
from ..ui import Button, draw_text
from .main_menu import MainMenuScene


class BootScene(SceneBase):
    def __init__(self, ctx: GameContext) -> None:
        super().__init__(ctx)
        self._frames = 0
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        # Let one frame render the loading text before the blocking fetch.
        self._frames += 1
        if self._did_boot or self._frames < 2:
            return None
        self._did_boot = True
        paths = self.ctx.paths
        try:
            paths.userdata_dir.mkdir(parents=True, exist_ok=True)
            self.ctx.preferences = PreferencesService(
                path=paths.userdata_dir / "preferences.json",
                schema_path=paths.schema_dir / "preferences.schema.json",
            )
            self.ctx.catalog = self.ctx.catalog_service.load_catalog()
            self.ctx.telemetry.log("boot", {"ok": True, "catalog_size": len(self.ctx.catalog)})
            return SceneTransition(MainMenuScene(self.ctx))
        except (CatalogError, PreferencesError, OSError) as e:
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self.ctx.telemetry.log("boot", {"ok": False, "error": str(e)})
            self._quit_button = Button(
                rect=pygame.Rect(20, self.ctx.screen.get_height() - 64, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        palette = self.ctx.palette
        fonts = self.ctx.assets.fonts
        screen.fill(palette.background)
        draw_text(screen, fonts.big, "PokeMatch", (20, 20), color=palette.text)

        if self._error is None:
            draw_text(
                screen,
                fonts.ui,
                f"Loading Pokemon list from {self.ctx.catalog_service.base_url} ...",
                (20, 80),
                color=palette.text,
            )
        else:
            draw_text(screen, fonts.ui, "BOOT ERROR", (20, 80), color=palette.accent)
            y = 120
            for line in self._error.splitlines()[:22]:
                draw_text(screen, fonts.small, line[:120], (20, y), color=palette.text)
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, fonts.ui, palette)
