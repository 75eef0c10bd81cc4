from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from ..app import GameContext
from ..scene_base import SceneBase
from ..ui import Button, Toggle, draw_text


class SettingsScene(SceneBase):
    def __init__(self, ctx: GameContext) -> None:
        super().__init__(ctx)
        prefs = self.ctx.preferences
        current = prefs is not None and prefs.theme == "dark"

        self.btn_back = Button(rect=pygame.Rect(20, 20, 120, 40), text="Back", on_click=self._on_back)
        self.toggle_theme = Toggle(
            rect=pygame.Rect(40, 120, 520, 44),
            label="Dark theme",
            value=current,
            on_change=self._on_toggle_theme,
        )

    def _on_back(self) -> None:
        from .main_menu import MainMenuScene

        self._go(MainMenuScene(self.ctx))

    def _on_toggle_theme(self, value: bool) -> None:
        prefs = self.ctx.preferences
        if prefs is None:
            return
        if (prefs.theme == "dark") != value:
            self.ctx.toggle_theme()

    def handle_event(self, event: pygame.event.Event) -> None:
        self.btn_back.handle_event(event)
        self.toggle_theme.handle_event(event)

    def render(self, screen: pygame.Surface) -> None:
        palette = self.ctx.palette
        fonts = self.ctx.assets.fonts
        screen.fill(palette.background)
        self.btn_back.draw(screen, fonts.ui, palette)
        draw_text(screen, fonts.big, "Settings", (40, 70), color=palette.text)
        self.toggle_theme.draw(screen, fonts.ui, palette)
