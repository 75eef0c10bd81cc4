from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import pygame  # type: ignore[import-not-found]

if TYPE_CHECKING:
    from .app import GameContext


@dataclass
class SceneTransition:
    next_scene: "Scene"


class Scene(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> SceneTransition | None: ...
    def render(self, screen: pygame.Surface) -> None: ...


class SceneBase:
    """Shared plumbing: holds the context and a pending transition."""

    def __init__(self, ctx: "GameContext") -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def update(self, dt: float) -> SceneTransition | None:
        return self._next
