from __future__ import annotations

from dataclasses import dataclass

from pokematch.engine.types import Theme

Color = tuple[int, int, int]


@dataclass(frozen=True)
class Palette:
    background: Color
    panel: Color
    border: Color
    text: Color
    muted: Color
    accent: Color
    button: Color
    button_disabled: Color
    button_text: Color
    card_back: Color
    card_face: Color
    matched: Color


LIGHT = Palette(
    background=(236, 238, 244),
    panel=(250, 250, 252),
    border=(40, 40, 48),
    text=(24, 24, 32),
    muted=(110, 110, 124),
    accent=(210, 60, 60),
    button=(70, 110, 190),
    button_disabled=(170, 176, 190),
    button_text=(250, 250, 250),
    card_back=(200, 60, 60),
    card_face=(255, 255, 255),
    matched=(90, 180, 110),
)

DARK = Palette(
    background=(12, 12, 18),
    panel=(24, 24, 32),
    border=(0, 0, 0),
    text=(240, 240, 240),
    muted=(140, 140, 160),
    accent=(240, 200, 120),
    button=(60, 60, 60),
    button_disabled=(30, 30, 30),
    button_text=(240, 240, 240),
    card_back=(120, 30, 40),
    card_face=(36, 36, 48),
    matched=(60, 140, 80),
)


def palette_for(theme: Theme) -> Palette:
    return DARK if theme == "dark" else LIGHT
