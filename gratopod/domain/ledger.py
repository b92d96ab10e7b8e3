"""Collection ledger: owned counts per catalog entry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .catalog import Catalog, Rarity, RarityTable


@dataclass(frozen=True, slots=True)
class CollectionStats:
    unique_count: int
    total_owned: int
    duplicate_count: int

    def completion_percent(self, catalog_size: int) -> float:
        if catalog_size <= 0:
            return 0.0
        return round(self.unique_count / catalog_size * 100, 1)


class CollectionLedger:
    """Mutable owned-count map. Counts only ever grow until :meth:`reset`."""

    def __init__(self) -> None:
        self._owned: dict[int, int] = {}

    def count(self, element_number: int) -> int:
        return self._owned.get(element_number, 0)

    def is_duplicate(self, element_number: int) -> bool:
        return self.count(element_number) > 0

    def record_pull(self, element_number: int) -> int:
        new_count = self.count(element_number) + 1
        self._owned[element_number] = new_count
        return new_count

    def stats(self) -> CollectionStats:
        unique = sum(1 for count in self._owned.values() if count > 0)
        total = sum(self._owned.values())
        return CollectionStats(unique_count=unique, total_owned=total, duplicate_count=total - unique)

    def owned_by_rarity(self, catalog: Catalog, rarity_table: RarityTable) -> dict[Rarity, int]:
        """Unique entries owned per tier, in rarity-table order."""
        return {
            rarity: sum(1 for entry in pool if self.is_duplicate(entry.element_number))
            for rarity, pool in catalog.by_rarity(rarity_table).items()
        }

    def snapshot(self) -> dict[int, int]:
        return {number: count for number, count in self._owned.items() if count > 0}

    def restore(self, owned: Mapping[int, int]) -> None:
        """Replace counts with previously persisted ones."""
        for number, count in owned.items():
            if count < 0:
                raise ValueError(f"Owned count for {number} cannot be negative")
        self._owned = {int(number): int(count) for number, count in owned.items() if count > 0}

    def reset(self) -> None:
        self._owned.clear()
