"""Catalog and rarity table models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Mapping

from .exceptions import ConfigurationError


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


@dataclass(frozen=True, slots=True)
class RarityMeta:
    """Draw weight and duplicate reward for a rarity tier."""

    rarity: Rarity
    weight: float
    dust_value: int
    label: str = ""
    color: str = ""
    glow: str = ""


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """Definition of a collectible guy."""

    element_number: int
    rarity: Rarity
    symbol: str
    relative_path: str
    nickname_slug: str = ""
    element_slug: str = ""
    filename: str = ""

    @property
    def key(self) -> str:
        return f"{self.element_number}-{self.rarity.value}"

    @property
    def display_name(self) -> str:
        return f"{_title_slug(self.nickname_slug)} {_title_slug(self.element_slug)}".strip()


def _title_slug(slug: str) -> str:
    """Uppercase the first letter of each dash-separated part; the rest is kept as is."""
    return " ".join(part[:1].upper() + part[1:] for part in slug.split("-") if part)


class RarityTable:
    """Ordered mapping of rarity tiers to their metadata."""

    def __init__(self, tiers: Iterable[RarityMeta]) -> None:
        self._tiers: dict[Rarity, RarityMeta] = {}
        for meta in tiers:
            if meta.rarity in self._tiers:
                raise ConfigurationError(f"Rarity {meta.rarity.value} defined multiple times")
            if not isinstance(meta.weight, (int, float)) or not math.isfinite(meta.weight):
                raise ConfigurationError(
                    f"Rarity {meta.rarity.value} has non-finite weight {meta.weight!r}"
                )
            if meta.weight <= 0:
                raise ConfigurationError(
                    f"Rarity {meta.rarity.value} has non-positive weight {meta.weight!r}"
                )
            if meta.dust_value < 0:
                raise ConfigurationError(
                    f"Rarity {meta.rarity.value} has negative dust value {meta.dust_value!r}"
                )
            self._tiers[meta.rarity] = meta
        if not self._tiers:
            raise ConfigurationError("Rarity table must define at least one tier")

    def __getitem__(self, rarity: Rarity) -> RarityMeta:
        try:
            return self._tiers[rarity]
        except KeyError as exc:
            raise ConfigurationError(f"Rarity {rarity.value} is not configured") from exc

    def __contains__(self, rarity: object) -> bool:
        return rarity in self._tiers

    def __iter__(self) -> Iterator[RarityMeta]:
        return iter(self._tiers.values())

    def __len__(self) -> int:
        return len(self._tiers)

    def index_of(self, rarity: Rarity) -> int:
        for idx, tier in enumerate(self._tiers):
            if tier is rarity:
                return idx
        raise ConfigurationError(f"Rarity {rarity.value} is not configured")

    def with_weights(self, weights: Mapping[str, float]) -> "RarityTable":
        """Return a copy of the table with some tier weights replaced."""
        unknown = set(weights) - {tier.value for tier in self._tiers}
        if unknown:
            raise ConfigurationError(f"Weight overrides reference unknown rarities: {sorted(unknown)}")
        return RarityTable(
            RarityMeta(
                rarity=meta.rarity,
                weight=float(weights.get(meta.rarity.value, meta.weight)),
                dust_value=meta.dust_value,
                label=meta.label,
                color=meta.color,
                glow=meta.glow,
            )
            for meta in self._tiers.values()
        )


DEFAULT_RARITY_TABLE = RarityTable(
    [
        RarityMeta(Rarity.COMMON, 45, 1, "Common", "#8B90B0", "rgba(139,144,176,0.25)"),
        RarityMeta(Rarity.UNCOMMON, 25, 2, "Uncommon", "#4ADE80", "rgba(74,222,128,0.35)"),
        RarityMeta(Rarity.RARE, 16, 4, "Rare", "#3B82F6", "rgba(59,130,246,0.4)"),
        RarityMeta(Rarity.EPIC, 8, 8, "Epic", "#9A4DFF", "rgba(154,77,255,0.45)"),
        RarityMeta(Rarity.LEGENDARY, 6, 15, "Legendary", "#F59E0B", "rgba(245,158,11,0.5)"),
    ]
)


class Catalog:
    """Immutable collection of catalog entries keyed by element number.

    Passing ``rarity_table`` also checks that every entry uses a known tier.
    """

    def __init__(
        self, entries: Iterable[CatalogEntry], rarity_table: RarityTable | None = None
    ) -> None:
        self._entries = tuple(entries)
        if not self._entries:
            raise ConfigurationError("Catalog must contain at least one entry")
        self._by_number: dict[int, CatalogEntry] = {}
        for entry in self._entries:
            if entry.element_number in self._by_number:
                raise ConfigurationError(
                    f"Element number {entry.element_number} defined multiple times"
                )
            self._by_number[entry.element_number] = entry
        if rarity_table is not None:
            self.ensure_rarities(rarity_table)

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __contains__(self, element_number: object) -> bool:
        return element_number in self._by_number

    def get(self, element_number: int) -> CatalogEntry:
        try:
            return self._by_number[element_number]
        except KeyError as exc:
            raise KeyError(f"Element {element_number} not found") from exc

    def ensure_rarities(self, rarity_table: RarityTable) -> None:
        for entry in self._entries:
            if entry.rarity not in rarity_table:
                raise ConfigurationError(
                    f"Entry {entry.element_number} references unknown rarity {entry.rarity.value}"
                )

    def by_rarity(self, rarity_table: RarityTable) -> dict[Rarity, list[CatalogEntry]]:
        """Group entries per tier in rarity-table order; tiers without entries are omitted."""
        self.ensure_rarities(rarity_table)
        grouped: dict[Rarity, list[CatalogEntry]] = {meta.rarity: [] for meta in rarity_table}
        for entry in self._entries:
            grouped[entry.rarity].append(entry)
        return {rarity: pool for rarity, pool in grouped.items() if pool}

    def tiers_present(self, rarity_table: RarityTable) -> tuple[Rarity, ...]:
        """Tiers with at least one entry, in rarity-table order."""
        return tuple(self.by_rarity(rarity_table))
