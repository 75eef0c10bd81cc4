from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from pokematch.engine.session import GameSession
from pokematch.engine.types import Difficulty

from ..app import GameContext
from ..scene_base import SceneBase, SceneTransition
from ..ui import draw_text
from .game import GameScene, card_rects


class LoadingScene(SceneBase):
    """Downloads the artwork for a freshly dealt board, one image per frame."""

    def __init__(self, ctx: GameContext, session: GameSession, difficulty: Difficulty) -> None:
        super().__init__(ctx)
        self.session = session
        self.difficulty = difficulty
        rects = card_rects(ctx.screen.get_size(), len(session.board.cards))
        self.card_size = rects[0].size if rects else (64, 64)
        # dict keeps deal order and drops the duplicate of each pair
        urls = dict.fromkeys(c.face_image for c in session.board.cards)
        self._queue = [u for u in urls if not ctx.assets.is_loaded(u, self.card_size)]
        self._total = len(self._queue)

    def handle_event(self, event: pygame.event.Event) -> None:
        return None

    def update(self, dt: float) -> SceneTransition | None:
        if self._queue:
            url = self._queue.pop(0)
            self.ctx.assets.get_remote_image(url, self.card_size)
            return None
        return SceneTransition(GameScene(self.ctx, session=self.session, difficulty=self.difficulty))

    def render(self, screen: pygame.Surface) -> None:
        palette = self.ctx.palette
        fonts = self.ctx.assets.fonts
        screen.fill(palette.background)
        done = self._total - len(self._queue)
        draw_text(screen, fonts.big, "Shuffling cards...", (60, 60), color=palette.text)
        draw_text(screen, fonts.ui, f"Artwork {done} / {self._total}", (60, 120), color=palette.muted)

        bar = pygame.Rect(60, 160, 400, 24)
        pygame.draw.rect(screen, palette.panel, bar, border_radius=6)
        if self._total:
            filled = bar.copy()
            filled.width = int(bar.width * done / self._total)
            pygame.draw.rect(screen, palette.button, filled, border_radius=6)
        pygame.draw.rect(screen, palette.border, bar, width=2, border_radius=6)
