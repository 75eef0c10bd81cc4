from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]

from .theme import Color, Palette


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_centered(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    center: tuple[int, int],
    color: Color,
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, img.get_rect(center=center).topleft)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, palette: Palette) -> None:
        bg = palette.button if self.enabled else palette.button_disabled
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, palette.border, self.rect, width=2, border_radius=8)
        draw_centered(screen, font, self.text, self.rect.center, palette.button_text)


@dataclass
class Toggle:
    rect: pygame.Rect
    label: str
    value: bool
    on_change: Callable[[bool], None]

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.value = not self.value
                self.on_change(self.value)
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, palette: Palette) -> None:
        pygame.draw.rect(screen, palette.panel, self.rect, border_radius=8)
        pygame.draw.rect(screen, palette.border, self.rect, width=2, border_radius=8)
        box = pygame.Rect(self.rect.x + 10, self.rect.y + 10, 22, 22)
        pygame.draw.rect(screen, palette.text, box, width=2)
        if self.value:
            pygame.draw.line(screen, palette.text, (box.x + 4, box.y + 12), (box.x + 10, box.y + 18), 3)
            pygame.draw.line(screen, palette.text, (box.x + 10, box.y + 18), (box.x + 18, box.y + 6), 3)
        txt = font.render(self.label, True, palette.text)
        screen.blit(txt, (box.right + 10, self.rect.y + 8))
