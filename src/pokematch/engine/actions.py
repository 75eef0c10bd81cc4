from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FlipAction:
    index: int


@dataclass(frozen=True)
class PowerUpAction:
    pass


@dataclass(frozen=True)
class WaitAction:
    """Advance the session clock by `seconds` of wall time."""

    seconds: float


Action = FlipAction | PowerUpAction | WaitAction
