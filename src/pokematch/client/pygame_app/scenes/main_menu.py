from __future__ import annotations

import random

import pygame  # type: ignore[import-not-found]

from pokematch.engine.session import new_session
from pokematch.engine.types import DIFFICULTY_PAIRS, Difficulty

from ..app import GameContext
from ..scene_base import SceneBase
from ..ui import Button, draw_text
from .loading import LoadingScene
from .settings import SettingsScene

DIFFICULTIES: list[Difficulty] = list(DIFFICULTY_PAIRS)


class MainMenuScene(SceneBase):
    def __init__(self, ctx: GameContext) -> None:
        super().__init__(ctx)
        self._message = ""
        prefs = ctx.preferences
        if ctx.difficulty is not None:
            self.difficulty: Difficulty = ctx.difficulty
        elif prefs is not None:
            self.difficulty = prefs.prefs.last_difficulty
        else:
            self.difficulty = "easy"
        self._build_ui()

    def _build_ui(self) -> None:
        x = 60
        y = 160
        w = 320
        h = 56
        gap = 14

        self.btn_difficulty = Button(
            rect=pygame.Rect(x, y, w, h),
            text=self._difficulty_label(),
            on_click=self._cycle_difficulty,
        )
        self._buttons = [
            self.btn_difficulty,
            Button(
                rect=pygame.Rect(x, y + (h + gap) * 1, w, h),
                text="Start",
                on_click=self._on_start,
            ),
            Button(
                rect=pygame.Rect(x, y + (h + gap) * 2, w, h),
                text="Settings",
                on_click=lambda: self._go(SettingsScene(self.ctx)),
            ),
            Button(
                rect=pygame.Rect(x, y + (h + gap) * 3, w, h),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            ),
        ]

    def _difficulty_label(self) -> str:
        return f"Difficulty: {self.difficulty} ({DIFFICULTY_PAIRS[self.difficulty]} pairs)"

    def _cycle_difficulty(self) -> None:
        i = DIFFICULTIES.index(self.difficulty)
        self.difficulty = DIFFICULTIES[(i + 1) % len(DIFFICULTIES)]
        self.btn_difficulty.text = self._difficulty_label()

    def _on_start(self) -> None:
        catalog = self.ctx.catalog
        if catalog is None:
            return
        pairs = DIFFICULTY_PAIRS[self.difficulty]
        seed = self.ctx.seed if self.ctx.seed is not None else random.randrange(1, 2**31 - 1)
        try:
            session = new_session(catalog, pairs, seed=seed)
        except ValueError as e:
            self._message = str(e)
            return
        if self.ctx.preferences is not None:
            self.ctx.preferences.set_last_difficulty(self.difficulty)
        self._go(LoadingScene(self.ctx, session=session, difficulty=self.difficulty))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def render(self, screen: pygame.Surface) -> None:
        palette = self.ctx.palette
        fonts = self.ctx.assets.fonts
        screen.fill(palette.background)
        draw_text(screen, fonts.big, "PokeMatch", (60, 40), color=palette.text)
        catalog = self.ctx.catalog
        if catalog is not None:
            draw_text(
                screen,
                fonts.ui,
                f"{len(catalog)} Pokemon loaded. Find every pair before the clock runs out.",
                (60, 100),
                color=palette.muted,
            )
        for b in self._buttons:
            b.draw(screen, fonts.ui, palette)
        if self._message:
            draw_text(screen, fonts.ui, self._message, (60, 460), color=palette.accent)
