"""Weighted rarity roll followed by a uniform pick inside the tier."""

from __future__ import annotations

from typing import Protocol, Sequence

from .catalog import Catalog, CatalogEntry, Rarity, RarityTable
from .exceptions import ConfigurationError


class RandomSource(Protocol):
    def random(self) -> float: ...


def roll(catalog: Catalog, rarity_table: RarityTable, rng: RandomSource) -> CatalogEntry:
    """Draw one entry: pick a tier by weight, then an entry uniformly within it.

    Weights are normalised by the tiers actually present in the catalog, so a
    tier without entries never swallows probability mass.
    """
    if not len(catalog):
        raise ConfigurationError("Cannot roll from an empty catalog")
    pools = catalog.by_rarity(rarity_table)
    tiers = list(pools)
    weights = [rarity_table[tier].weight for tier in tiers]
    for tier, weight in zip(tiers, weights):
        if weight <= 0:
            raise ConfigurationError(f"Rarity {tier.value} has non-positive weight {weight!r}")

    tier = tiers[_weighted_index(weights, rng)]
    pool = pools[tier]
    return pool[_uniform_index(len(pool), rng)]


def tier_probabilities(catalog: Catalog, rarity_table: RarityTable) -> dict[Rarity, float]:
    """Return the draw probability of each tier present in the catalog."""
    tiers = catalog.tiers_present(rarity_table)
    total = sum(rarity_table[tier].weight for tier in tiers)
    return {tier: rarity_table[tier].weight / total for tier in tiers}


def _weighted_index(weights: Sequence[float], rng: RandomSource) -> int:
    total = sum(weights)
    threshold = rng.random() * total
    cumulative = 0.0
    for idx, weight in enumerate(weights):
        cumulative += weight
        if threshold < cumulative:
            return idx
    # Floating point drift can leave threshold == total.
    return len(weights) - 1


def _uniform_index(size: int, rng: RandomSource) -> int:
    return min(int(rng.random() * size), size - 1)
