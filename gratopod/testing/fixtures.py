"""Pytest fixtures for gratopod."""

from __future__ import annotations

import pytest

from ..app import LabApp
from ..config import EconomyConfig, LabConfig
from ..domain.catalog import Rarity
from .factory import CatalogEntryFactory

DEFAULT_PER_RARITY = {
    Rarity.COMMON: 6,
    Rarity.UNCOMMON: 4,
    Rarity.RARE: 3,
    Rarity.EPIC: 2,
    Rarity.LEGENDARY: 1,
}


@pytest.fixture()
def memory_app() -> LabApp:
    return app_fixture()


def app_fixture(*, economy: EconomyConfig | None = None, rng_seed: int | None = 7, **kwargs) -> LabApp:
    """Helper for ad-hoc tests where pytest fixtures are not available."""
    config = LabConfig(economy=economy or EconomyConfig(), rng_seed=rng_seed)
    catalog = CatalogEntryFactory().catalog(DEFAULT_PER_RARITY)
    return LabApp(config, catalog=catalog, **kwargs)
