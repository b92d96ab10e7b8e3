import pytest

from gratopod.domain.catalog import DEFAULT_RARITY_TABLE, Catalog, CatalogEntry, Rarity
from gratopod.domain.engine import PackEngine
from gratopod.storage.memory import InMemoryStateStore
from gratopod.storage.retry import RetryingStateWriter
from gratopod.testing.factory import ScriptedRandom
from gratopod.testing.fixtures import memory_app  # noqa: F401


def _entry(number: int, rarity: Rarity, symbol: str) -> CatalogEntry:
    return CatalogEntry(
        element_number=number,
        rarity=rarity,
        symbol=symbol,
        relative_path=f"{rarity.value}/{number:03d}.png",
        nickname_slug="test-guy",
        element_slug=symbol.lower(),
        filename=f"{number:03d}.png",
    )


@pytest.fixture()
def catalog() -> Catalog:
    return Catalog(
        [
            _entry(1, Rarity.COMMON, "H"),
            _entry(2, Rarity.COMMON, "He"),
            _entry(3, Rarity.COMMON, "Li"),
            _entry(4, Rarity.UNCOMMON, "Be"),
            _entry(5, Rarity.UNCOMMON, "B"),
            _entry(6, Rarity.RARE, "C"),
            _entry(7, Rarity.EPIC, "N"),
            _entry(8, Rarity.LEGENDARY, "O"),
        ]
    )


@pytest.fixture()
def store() -> InMemoryStateStore:
    return InMemoryStateStore()


async def _no_sleep(delay: float) -> None:
    return None


@pytest.fixture()
def make_engine(catalog):
    def factory(
        *,
        store=None,
        rng=None,
        event_bus=None,
        open_cost=100,
        starting_coins=1000,
        history_size=8,
        write_timeout=None,
    ):
        store = store if store is not None else InMemoryStateStore()
        return PackEngine(
            catalog,
            DEFAULT_RARITY_TABLE,
            store,
            event_bus,
            open_cost=open_cost,
            starting_coins=starting_coins,
            history_size=history_size,
            rng=rng if rng is not None else ScriptedRandom([]),
            writer=RetryingStateWriter(
                store, attempts=3, write_timeout=write_timeout, sleep=_no_sleep
            ),
        )

    return factory
