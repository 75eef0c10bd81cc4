from __future__ import annotations

from pokematch.client.pygame_app.main import build_parser
from pokematch.client.pygame_app.scenes.game import HEADER_HEIGHT, card_rects, grid_shape
from pokematch.client.pygame_app.theme import DARK, LIGHT, palette_for


def test_grid_shapes_for_each_difficulty() -> None:
    assert grid_shape(6) == (3, 2)
    assert grid_shape(12) == (4, 3)
    assert grid_shape(18) == (6, 3)
    assert grid_shape(8) == (3, 3)
    assert grid_shape(0) == (0, 0)


def test_card_rects_fit_screen_without_overlap() -> None:
    screen = (1024, 768)
    for n in (6, 12, 18):
        rects = card_rects(screen, n)
        assert len(rects) == n
        assert len({r.size for r in rects}) == 1
        for r in rects:
            assert r.top >= HEADER_HEIGHT
            assert r.left >= 0 and r.right <= screen[0]
            assert r.bottom <= screen[1]
        for i, a in enumerate(rects):
            for b in rects[i + 1 :]:
                assert not a.colliderect(b)


def test_palette_for_theme() -> None:
    assert palette_for("dark") is DARK
    assert palette_for("light") is LIGHT


def test_cli_defaults() -> None:
    args = build_parser().parse_args([])
    assert (args.width, args.height) == (1024, 768)
    assert args.difficulty is None
    assert args.seed is None
    args = build_parser().parse_args(["--difficulty", "hard", "--seed", "5"])
    assert args.difficulty == "hard"
    assert args.seed == 5
