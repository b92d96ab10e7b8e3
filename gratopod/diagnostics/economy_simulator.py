"""Economy simulation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import Dict

from ..app import LabApp
from ..domain.catalog import Rarity
from ..domain.ledger import CollectionLedger
from ..domain.roller import roll, tier_probabilities


@dataclass(slots=True)
class SimulationResult:
    pulls: int
    tier_counts: Dict[Rarity, int] = field(default_factory=dict)
    uniques: int = 0
    duplicates: int = 0
    dust: int = 0
    coins_spent: int = 0
    completed_after: int | None = None

    def tier_frequencies(self) -> Dict[Rarity, float]:
        if not self.pulls:
            return {}
        return {rarity: count / self.pulls for rarity, count in self.tier_counts.items()}


class EconomySimulator:
    """Monte-Carlo simulation of pack openings against a fresh ledger."""

    def __init__(self, app: LabApp, *, rng: Random | None = None) -> None:
        self._app = app
        self._rng = rng or Random()

    def expected_frequencies(self) -> Dict[Rarity, float]:
        return tier_probabilities(self._app.catalog, self._app.rarity_table)

    def simulate(self, *, pulls: int = 1000) -> SimulationResult:
        catalog = self._app.catalog
        table = self._app.rarity_table
        ledger = CollectionLedger()
        result = SimulationResult(pulls=pulls)

        for pull in range(1, pulls + 1):
            entry = roll(catalog, table, self._rng)
            result.tier_counts[entry.rarity] = result.tier_counts.get(entry.rarity, 0) + 1
            if ledger.is_duplicate(entry.element_number):
                result.duplicates += 1
                result.dust += table[entry.rarity].dust_value
            else:
                result.uniques += 1
            ledger.record_pull(entry.element_number)
            if result.completed_after is None and result.uniques == len(catalog):
                result.completed_after = pull

        result.coins_spent = pulls * self._app.config.economy.open_cost
        return result
