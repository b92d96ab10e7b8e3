import pytest

from gratopod.domain.catalog import DEFAULT_RARITY_TABLE, CatalogEntry, Rarity
from gratopod.domain.economy import Wallet
from gratopod.domain.exceptions import InsufficientFundsError
from gratopod.domain.history import PullHistory, PullResult
from gratopod.domain.ledger import CollectionLedger


def test_record_pull_counts_up_and_flags_duplicates():
    ledger = CollectionLedger()
    assert not ledger.is_duplicate(7)
    assert ledger.record_pull(7) == 1
    assert ledger.is_duplicate(7)
    assert ledger.record_pull(7) == 2
    assert ledger.record_pull(3) == 1

    stats = ledger.stats()
    assert (stats.unique_count, stats.total_owned, stats.duplicate_count) == (2, 3, 1)


def test_reset_clears_counts():
    ledger = CollectionLedger()
    ledger.record_pull(1)
    ledger.reset()
    assert ledger.snapshot() == {}
    assert ledger.stats().total_owned == 0


def test_restore_rejects_negative_counts():
    ledger = CollectionLedger()
    with pytest.raises(ValueError):
        ledger.restore({1: -1})


def test_completion_percent_rounds_to_one_decimal():
    ledger = CollectionLedger()
    ledger.record_pull(1)
    assert ledger.stats().completion_percent(640) == 0.2
    assert ledger.stats().completion_percent(0) == 0.0


def test_owned_by_rarity(catalog):
    ledger = CollectionLedger()
    ledger.record_pull(1)
    ledger.record_pull(1)
    ledger.record_pull(8)
    owned = ledger.owned_by_rarity(catalog, DEFAULT_RARITY_TABLE)
    assert owned[Rarity.COMMON] == 1
    assert owned[Rarity.LEGENDARY] == 1
    assert owned[Rarity.RARE] == 0


def test_wallet_debit_rejects_overdraft_without_mutation():
    wallet = Wallet(coins=50)
    assert not wallet.can_afford(100)
    with pytest.raises(InsufficientFundsError) as excinfo:
        wallet.debit(100)
    assert excinfo.value.cost == 100
    assert excinfo.value.balance == 50
    assert wallet.coins == 50


def test_wallet_credit_and_grant():
    wallet = Wallet()
    wallet.credit_dust(0)
    wallet.credit_dust(4)
    wallet.grant_coins(1000)
    assert (wallet.coins, wallet.dust) == (1000, 4)
    with pytest.raises(ValueError):
        wallet.grant_coins(-1)
    with pytest.raises(ValueError):
        wallet.credit_dust(-1)


def test_wallet_rejects_negative_balances():
    with pytest.raises(ValueError):
        Wallet(coins=-1)


def _result(number: int) -> PullResult:
    entry = CatalogEntry(number, Rarity.COMMON, "H", "x.png")
    return PullResult(entry=entry, is_duplicate=False, duplicate_count_after=1, dust_awarded=0)


def test_history_is_newest_first_and_bounded():
    history = PullHistory(capacity=3)
    for number in range(1, 6):
        history.push(_result(number))
    assert [r.entry.element_number for r in history.snapshot()] == [5, 4, 3]
    assert history.latest().entry.element_number == 5


def test_history_restore_truncates_to_capacity():
    history = PullHistory(capacity=2)
    history.restore([_result(9), _result(8), _result(7)])
    assert [r.entry.element_number for r in history.snapshot()] == [9, 8]


def test_history_capacity_must_be_positive():
    with pytest.raises(ValueError):
        PullHistory(capacity=0)


def test_display_name_and_key():
    entry = CatalogEntry(12, Rarity.EPIC, "Mg", "epic/012.png", "sparky-boi", "magnesium")
    assert entry.display_name == "Sparky Boi Magnesium"
    assert entry.key == "12-epic"


def test_display_name_keeps_inner_capitals():
    entry = CatalogEntry(1, Rarity.COMMON, "H", "common/001.png", "mcFly-x", "hydrogen-ION")
    assert entry.display_name == "McFly X Hydrogen ION"
