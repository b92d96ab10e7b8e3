"""Factories for tests and prototyping."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from random import Random
from typing import Iterable, Iterator, Mapping

from faker import Faker

from ..domain.catalog import Catalog, CatalogEntry, Rarity


@dataclass(slots=True)
class CatalogEntryFactory:
    faker: Faker = field(default_factory=Faker)
    rng: Random = field(default_factory=Random)
    _numbers: Iterator[int] = field(default_factory=lambda: count(1))

    def build(self, rarity: Rarity | None = None) -> CatalogEntry:
        rarity = rarity or self.rng.choice(list(Rarity))
        number = next(self._numbers)
        nickname = self.faker.unique.first_name().lower()
        element = self.faker.word().lower()
        filename = f"{number:03d}-{nickname}-{element}-{rarity.value}.png"
        return CatalogEntry(
            element_number=number,
            rarity=rarity,
            symbol=element[:2].title(),
            relative_path=f"{rarity.value}/{filename}",
            nickname_slug=nickname,
            element_slug=element,
            filename=filename,
        )

    def batch(self, amount: int, rarity: Rarity | None = None) -> Iterable[CatalogEntry]:
        for _ in range(amount):
            yield self.build(rarity=rarity)

    def catalog(self, per_rarity: Mapping[Rarity, int]) -> Catalog:
        entries: list[CatalogEntry] = []
        for rarity, amount in per_rarity.items():
            entries.extend(self.batch(amount, rarity=rarity))
        return Catalog(entries)


class ScriptedRandom:
    """Random source replaying fixed values in ``[0, 1)``."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = list(values)
        self._index = 0

    def random(self) -> float:
        if self._index >= len(self._values):
            raise AssertionError("ScriptedRandom ran out of values")
        value = self._values[self._index]
        self._index += 1
        return value

    def extend(self, values: Iterable[float]) -> None:
        self._values.extend(values)
