"""Deterministic, headless game engine for PokeMatch.

IMPORTANT: This package must never import pygame.
"""

from .actions import FlipAction, PowerUpAction, WaitAction
from .board import BoardState, CardInstance, deal
from .session import GameSession, SessionConfig, StepResult, new_session, reset_session, step
from .types import DIFFICULTY_PAIRS, Catalog, CatalogEntry, Difficulty, Theme, image_url

__all__ = [
    "DIFFICULTY_PAIRS",
    "BoardState",
    "CardInstance",
    "Catalog",
    "CatalogEntry",
    "Difficulty",
    "FlipAction",
    "GameSession",
    "PowerUpAction",
    "SessionConfig",
    "StepResult",
    "Theme",
    "WaitAction",
    "deal",
    "image_url",
    "new_session",
    "reset_session",
    "step",
]
