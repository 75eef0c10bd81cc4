from __future__ import annotations

import os
from pathlib import Path

# Allow headless generation (CI, terminals without a display)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore[import-not-found]


def _repo_root() -> Path:
    # tools/generate_placeholder_assets.py -> parents: [tools, repo_root]
    return Path(__file__).resolve().parents[1]


CARD_SIZE = (240, 320)
BALL_RED = (204, 40, 48)
BALL_WHITE = (245, 245, 245)
INK = (20, 20, 20)


def generate_all() -> None:
    root = _repo_root()
    ui_dir = root / "assets" / "ui"
    ui_dir.mkdir(parents=True, exist_ok=True)

    pygame.init()
    pygame.font.init()
    font = pygame.font.SysFont(None, 30)

    _make_card_back(ui_dir / "card_back.png", font)

    pygame.quit()
    print("Generated placeholder assets under ./assets/")


def _make_card_back(path: Path, font: pygame.font.Font) -> None:
    w, h = CARD_SIZE
    surf = pygame.Surface(CARD_SIZE, pygame.SRCALPHA)
    pygame.draw.rect(surf, (40, 60, 140), pygame.Rect(0, 0, w, h), border_radius=14)
    pygame.draw.rect(surf, (250, 210, 60), pygame.Rect(8, 8, w - 16, h - 16), width=4, border_radius=10)

    # ball: red top half, white bottom half, band and button
    center = (w // 2, h // 2)
    radius = w // 3
    pygame.draw.circle(surf, BALL_WHITE, center, radius)
    pygame.draw.circle(surf, BALL_RED, center, radius, draw_top_left=True, draw_top_right=True)
    pygame.draw.rect(surf, INK, pygame.Rect(center[0] - radius, center[1] - 4, radius * 2, 8))
    pygame.draw.circle(surf, INK, center, radius, width=5)
    pygame.draw.circle(surf, BALL_WHITE, center, radius // 4)
    pygame.draw.circle(surf, INK, center, radius // 4, width=5)

    title = font.render("PokeMatch", True, (250, 210, 60))
    surf.blit(title, title.get_rect(center=(w // 2, h - 36)).topleft)

    pygame.image.save(surf, path.as_posix())


if __name__ == "__main__":
    generate_all()
