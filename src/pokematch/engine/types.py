from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Literal

Difficulty = Literal["easy", "medium", "hard"]
Theme = Literal["light", "dark"]

DIFFICULTY_PAIRS: dict[Difficulty, int] = {
    "easy": 3,
    "medium": 6,
    "hard": 9,
}

ARTWORK_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/other/official-artwork/{id}.png"
)


def image_url(item_id: int) -> str:
    return ARTWORK_URL_TEMPLATE.format(id=item_id)


@dataclass(frozen=True)
class CatalogEntry:
    id: int
    name: str


@dataclass(frozen=True)
class Catalog:
    """Immutable, ordered creature catalog used by the engine."""

    entries: tuple[CatalogEntry, ...]
    _by_id: dict[int, CatalogEntry] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_id = {e.id: e for e in self.entries}
        if len(by_id) != len(self.entries):
            raise ValueError("Catalog entries must have unique ids")
        object.__setattr__(self, "_by_id", by_id)

    @staticmethod
    def of(entries: Sequence[CatalogEntry]) -> "Catalog":
        return Catalog(entries=tuple(entries))

    def get(self, item_id: int) -> CatalogEntry:
        return self._by_id[item_id]

    def ids(self) -> Sequence[int]:
        return [e.id for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)
