from __future__ import annotations

import math

import pygame  # type: ignore[import-not-found]

from pokematch.engine.actions import FlipAction, PowerUpAction, WaitAction
from pokematch.engine.board import CardInstance
from pokematch.engine.session import GameSession, reset_session, status_line, step
from pokematch.engine.types import Difficulty

from ..app import GameContext
from ..scene_base import SceneBase, SceneTransition
from ..theme import Palette
from ..ui import Button, draw_centered, draw_text

HEADER_HEIGHT = 120
MARGIN = 20
GAP = 12
CARD_BACK_ASSET = "ui/card_back.png"

_GRID_COLUMNS = {6: 3, 12: 4, 18: 6}


def grid_shape(n_cards: int) -> tuple[int, int]:
    """(columns, rows) for a board of n_cards."""
    if n_cards <= 0:
        return (0, 0)
    cols = _GRID_COLUMNS.get(n_cards) or math.ceil(math.sqrt(n_cards))
    rows = math.ceil(n_cards / cols)
    return cols, rows


def card_rects(screen_size: tuple[int, int], n_cards: int) -> list[pygame.Rect]:
    cols, rows = grid_shape(n_cards)
    if cols == 0:
        return []
    w, h = screen_size
    avail_w = w - 2 * MARGIN - (cols - 1) * GAP
    avail_h = h - HEADER_HEIGHT - MARGIN - (rows - 1) * GAP
    # 3:4 playing card proportions
    card_w = min(avail_w // cols, (avail_h // rows) * 3 // 4)
    card_h = card_w * 4 // 3
    grid_w = cols * card_w + (cols - 1) * GAP
    x0 = (w - grid_w) // 2
    rects: list[pygame.Rect] = []
    for i in range(n_cards):
        r, c = divmod(i, cols)
        rects.append(pygame.Rect(x0 + c * (card_w + GAP), HEADER_HEIGHT + r * (card_h + GAP), card_w, card_h))
    return rects


class GameScene(SceneBase):
    def __init__(self, ctx: GameContext, session: GameSession, difficulty: Difficulty) -> None:
        super().__init__(ctx)
        self.session = session
        self.difficulty = difficulty
        self._rects = card_rects(ctx.screen.get_size(), len(session.board.cards))
        self._reported_end = False

        self.btn_menu = Button(rect=pygame.Rect(20, 20, 110, 40), text="Menu", on_click=self._on_menu)
        self.btn_reset = Button(rect=pygame.Rect(140, 20, 110, 40), text="Reset", on_click=self._on_reset)
        self.btn_power = Button(rect=pygame.Rect(260, 20, 140, 40), text="Power-up", on_click=self._on_power_up)
        self.btn_theme = Button(rect=pygame.Rect(410, 20, 110, 40), text="Theme", on_click=self.ctx.toggle_theme)

        w, h = ctx.screen.get_size()
        self.btn_again = Button(
            rect=pygame.Rect(w // 2 - 150, h // 2 + 30, 300, 56),
            text="Play again",
            on_click=self._on_reset,
        )
        self.btn_back = Button(
            rect=pygame.Rect(w // 2 - 150, h // 2 + 100, 300, 56),
            text="Main menu",
            on_click=self._on_menu,
        )

        self.ctx.telemetry.log(
            "game_started",
            {"difficulty": difficulty, "pairs": session.config.pairs, "seed": session.seed},
        )

    def _on_menu(self) -> None:
        from .main_menu import MainMenuScene

        self._go(MainMenuScene(self.ctx))

    def _on_reset(self) -> None:
        from .loading import LoadingScene

        fresh = reset_session(self.session)
        self.ctx.telemetry.log(
            "game_reset",
            {"previous_status": self.session.status, "clicks": self.session.board.clicks},
        )
        self._go(LoadingScene(self.ctx, session=fresh, difficulty=self.difficulty))

    def _on_power_up(self) -> None:
        res = step(self.session, PowerUpAction())
        if res.ok:
            self.ctx.telemetry.log("power_up", {"time_left": self.session.time_left})

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.session.is_over:
            self.btn_again.handle_event(event)
            self.btn_back.handle_event(event)
            return

        for b in (self.btn_menu, self.btn_reset, self.btn_power, self.btn_theme):
            if b.handle_event(event):
                return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            index = self._hit_test_card(event.pos)
            if index is not None:
                step(self.session, FlipAction(index=index))

    def _hit_test_card(self, pos: tuple[int, int]) -> int | None:
        for i, rect in enumerate(self._rects):
            if rect.collidepoint(pos):
                return i
        return None

    def update(self, dt: float) -> SceneTransition | None:
        if not self.session.is_over:
            step(self.session, WaitAction(seconds=dt))
        if self.session.is_over and not self._reported_end:
            self._reported_end = True
            board = self.session.board
            self.ctx.telemetry.log(
                "game_won" if self.session.status == "won" else "game_lost",
                {
                    "difficulty": self.difficulty,
                    "clicks": board.clicks,
                    "matched_pairs": board.matched_pairs,
                    "total_pairs": board.total_pairs,
                    "time_left": self.session.time_left,
                },
            )
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        palette = self.ctx.palette
        fonts = self.ctx.assets.fonts
        screen.fill(palette.background)

        self.btn_power.enabled = not self.session.power_up_used and not self.session.locked
        for b in (self.btn_menu, self.btn_reset, self.btn_power, self.btn_theme):
            b.draw(screen, fonts.ui, palette)

        draw_text(screen, fonts.ui, status_line(self.session), (20, 76), color=palette.text)

        for card, rect in zip(self.session.board.cards, self._rects):
            self._draw_card(screen, card, rect, palette)

        if self.session.is_over:
            self._draw_game_over(screen, palette)

    def _draw_card(self, screen: pygame.Surface, card: CardInstance, rect: pygame.Rect, palette: Palette) -> None:
        if not card.revealed:
            back = self.ctx.assets.get_image(CARD_BACK_ASSET, size=rect.size)
            if back is not None:
                screen.blit(back, rect.topleft)
            else:
                pygame.draw.rect(screen, palette.card_back, rect, border_radius=10)
                pygame.draw.circle(screen, palette.card_face, rect.center, rect.width // 5)
                pygame.draw.circle(screen, palette.border, rect.center, rect.width // 5, width=3)
            pygame.draw.rect(screen, palette.border, rect, width=2, border_radius=10)
            return

        pygame.draw.rect(screen, palette.card_face, rect, border_radius=10)
        art = self.ctx.assets.get_remote_image(card.face_image, rect.size)
        screen.blit(art, rect.topleft)
        draw_centered(screen, self.ctx.assets.fonts.small, card.name, (rect.centerx, rect.bottom - 12), palette.text)
        border = palette.matched if card.matched else palette.border
        pygame.draw.rect(screen, border, rect, width=4 if card.matched else 2, border_radius=10)

    def _draw_game_over(self, screen: pygame.Surface, palette: Palette) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        screen.blit(overlay, (0, 0))

        w, h = screen.get_size()
        if self.session.status == "won":
            title = "You Win! All pairs matched."
        else:
            title = "Game Over! You ran out of time."
        draw_centered(screen, self.ctx.assets.fonts.big, title, (w // 2, h // 2 - 40), (240, 240, 240))
        draw_centered(
            screen,
            self.ctx.assets.fonts.ui,
            status_line(self.session),
            (w // 2, h // 2),
            (240, 240, 240),
        )
        self.btn_again.draw(screen, self.ctx.assets.fonts.ui, palette)
        self.btn_back.draw(screen, self.ctx.assets.fonts.ui, palette)
