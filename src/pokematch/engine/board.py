from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import MutableSequence, TypeVar

from .types import Catalog, CatalogEntry, image_url

T = TypeVar("T")


@dataclass
class CardInstance:
    item_id: int
    name: str
    face_image: str
    revealed: bool = False
    matched: bool = False


@dataclass
class BoardState:
    cards: list[CardInstance]
    total_pairs: int
    clicks: int = 0
    matched_pairs: int = 0
    matched_ids: set[int] = field(default_factory=set)

    @property
    def pairs_left(self) -> int:
        return self.total_pairs - self.matched_pairs

    def is_complete(self) -> bool:
        return self.matched_pairs == self.total_pairs


def fisher_yates(rng: random.Random, items: MutableSequence[T]) -> None:
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]


def choose_entries(rng: random.Random, catalog: Catalog, pairs: int) -> list[CatalogEntry]:
    if pairs < 1:
        raise ValueError("A board needs at least one pair.")
    if pairs > len(catalog):
        raise ValueError(f"Catalog has only {len(catalog)} entries; cannot deal {pairs} pairs.")
    return rng.sample(list(catalog.entries), pairs)


def deal(rng: random.Random, catalog: Catalog, pairs: int) -> BoardState:
    """Pick `pairs` distinct entries, duplicate each one and shuffle the lot."""
    chosen = choose_entries(rng, catalog, pairs)
    pool: list[CatalogEntry] = []
    for entry in chosen:
        pool.append(entry)
        pool.append(entry)
    fisher_yates(rng, pool)

    cards = [CardInstance(item_id=e.id, name=e.name, face_image=image_url(e.id)) for e in pool]
    return BoardState(cards=cards, total_pairs=pairs)
