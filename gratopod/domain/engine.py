"""Pack-opening engine: spend coins, roll, update the ledger, persist."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Mapping

from .catalog import Catalog, Rarity, RarityTable
from .economy import Wallet
from .events import (
    COINS_GRANTED,
    PACK_OPENED,
    PROGRESS_RESET,
    CoinsGranted,
    EventBus,
    ProgressReset,
)
from .exceptions import BusyError, ConfigurationError, InsufficientFundsError
from .history import PullHistory, PullResult
from .ledger import CollectionLedger, CollectionStats
from .roller import RandomSource, roll
from ..storage.base import LabState, StateStore
from ..storage.retry import RetryingStateWriter

logger = logging.getLogger(__name__)


class EngineState(str, Enum):
    IDLE = "idle"
    OPENING = "opening"
    RESETTING = "resetting"


class OpenStatus(str, Enum):
    OPENED = "opened"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    BUSY = "busy"


@dataclass(frozen=True, slots=True)
class OpenAttempt:
    status: OpenStatus
    result: PullResult | None = None

    @property
    def opened(self) -> bool:
        return self.status is OpenStatus.OPENED


class PackEngine:
    """Owns the ledger, wallet and history and runs one open at a time.

    ``open_one`` is a single transaction from the caller's point of view. The
    in-memory state is authoritative: when the store rejects a write the pull
    still counts and the snapshot is handed to a :class:`RetryingStateWriter`.
    """

    def __init__(
        self,
        catalog: Catalog,
        rarity_table: RarityTable,
        store: StateStore,
        event_bus: EventBus | None = None,
        *,
        open_cost: int = 200,
        starting_coins: int = 5000,
        history_size: int = 8,
        rng: RandomSource | None = None,
        writer: RetryingStateWriter | None = None,
    ) -> None:
        catalog.ensure_rarities(rarity_table)
        if open_cost < 0:
            raise ConfigurationError(f"Open cost cannot be negative: {open_cost}")
        if starting_coins < 0:
            raise ConfigurationError(f"Starting coins cannot be negative: {starting_coins}")
        if history_size <= 0:
            raise ConfigurationError(f"History size must be positive: {history_size}")

        self._catalog = catalog
        self._rarity_table = rarity_table
        self._store = store
        self._events = event_bus or EventBus()
        self._open_cost = open_cost
        self._starting_coins = starting_coins
        self._rng = rng or Random()
        self._writer = writer or RetryingStateWriter(store)

        self._ledger = CollectionLedger()
        self._wallet = Wallet(coins=starting_coins)
        self._history = PullHistory(capacity=history_size)
        self._last_result: PullResult | None = None
        self._state = EngineState.IDLE

    async def load(self) -> bool:
        """Restore persisted state. Returns False when nothing was stored yet."""
        self._ensure_idle()
        stored = await self._store.load()
        if stored is None:
            logger.info("No stored lab state; starting with %s coins.", self._starting_coins)
            return False
        self._restore(stored)
        logger.info(
            "Loaded lab state: %s coins, %s dust, %s unique.",
            self.coins,
            self.dust,
            self.unique_count,
        )
        return True

    async def open_one(self) -> PullResult:
        """Open one pack. Raises BusyError or InsufficientFundsError without mutating state."""
        self._ensure_idle()
        if not self._wallet.can_afford(self._open_cost):
            raise InsufficientFundsError(cost=self._open_cost, balance=self._wallet.coins)

        self._state = EngineState.OPENING
        try:
            self._wallet.debit(self._open_cost)
            try:
                entry = roll(self._catalog, self._rarity_table, self._rng)
                was_duplicate = self._ledger.is_duplicate(entry.element_number)
                new_count = self._ledger.record_pull(entry.element_number)
            except Exception:
                self._wallet.refund(self._open_cost)
                raise

            meta = self._rarity_table[entry.rarity]
            dust_awarded = meta.dust_value if was_duplicate else 0
            self._wallet.credit_dust(dust_awarded)

            result = PullResult(
                entry=entry,
                is_duplicate=was_duplicate,
                duplicate_count_after=new_count,
                dust_awarded=dust_awarded,
                rarity_index=self._rarity_table.index_of(entry.rarity),
            )
            self._history.push(result)
            self._last_result = result
            logger.debug(
                "Opened #%03d %s (%s): duplicate=%s count=%s dust=%s",
                entry.element_number,
                entry.symbol,
                entry.rarity.value,
                was_duplicate,
                new_count,
                dust_awarded,
            )

            await self._persist()
            await self._events.publish(PACK_OPENED, result)
            return result
        finally:
            self._state = EngineState.IDLE

    async def try_open_one(self) -> OpenAttempt:
        """Like :meth:`open_one` but reports busy and unaffordable opens as a status."""
        try:
            result = await self.open_one()
        except BusyError:
            return OpenAttempt(OpenStatus.BUSY)
        except InsufficientFundsError:
            return OpenAttempt(OpenStatus.INSUFFICIENT_FUNDS)
        return OpenAttempt(OpenStatus.OPENED, result)

    async def reset_progress(self) -> None:
        self._ensure_idle()
        self._state = EngineState.RESETTING
        try:
            self._ledger.reset()
            self._wallet = Wallet(coins=self._starting_coins)
            self._history.clear()
            self._last_result = None
            logger.info("Lab progress reset to %s coins.", self._starting_coins)
            await self._persist()
            await self._events.publish(PROGRESS_RESET, ProgressReset(coins=self._starting_coins))
        finally:
            self._state = EngineState.IDLE

    async def grant_coins(self, amount: int) -> None:
        """Add coins unconditionally. Access control is the caller's policy."""
        self._wallet.grant_coins(amount)
        logger.info("Granted %s coins; balance is now %s.", amount, self._wallet.coins)
        await self._persist()
        await self._events.publish(COINS_GRANTED, CoinsGranted(amount=amount, balance=self.coins))

    async def flush(self) -> bool:
        """Wait for pending persistence retries. Returns True when the store is current."""
        return await self._writer.flush()

    async def close(self) -> None:
        await self._writer.close()

    def snapshot(self) -> LabState:
        return LabState(
            coins=self._wallet.coins,
            dust=self._wallet.dust,
            owned=self._ledger.snapshot(),
            recent=self._history.snapshot(),
        )

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def rarity_table(self) -> RarityTable:
        return self._rarity_table

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_opening(self) -> bool:
        return self._state is EngineState.OPENING

    @property
    def open_cost(self) -> int:
        return self._open_cost

    @property
    def starting_coins(self) -> int:
        return self._starting_coins

    @property
    def coins(self) -> int:
        return self._wallet.coins

    @property
    def dust(self) -> int:
        return self._wallet.dust

    @property
    def can_open(self) -> bool:
        return self._state is EngineState.IDLE and self._wallet.can_afford(self._open_cost)

    @property
    def stats(self) -> CollectionStats:
        return self._ledger.stats()

    @property
    def unique_count(self) -> int:
        return self._ledger.stats().unique_count

    @property
    def total_owned(self) -> int:
        return self._ledger.stats().total_owned

    @property
    def duplicate_count(self) -> int:
        return self._ledger.stats().duplicate_count

    @property
    def completion_percent(self) -> float:
        return self._ledger.stats().completion_percent(len(self._catalog))

    @property
    def recent(self) -> tuple[PullResult, ...]:
        return self._history.snapshot()

    @property
    def last_result(self) -> PullResult | None:
        return self._last_result

    @property
    def collection(self) -> Mapping[int, int]:
        return self._ledger.snapshot()

    def owned(self, element_number: int) -> int:
        return self._ledger.count(element_number)

    def owned_by_rarity(self) -> dict[Rarity, int]:
        return self._ledger.owned_by_rarity(self._catalog, self._rarity_table)

    def _ensure_idle(self) -> None:
        if self._state is not EngineState.IDLE:
            raise BusyError(f"Engine is {self._state.value}")

    def _restore(self, stored: LabState) -> None:
        unknown = [number for number in stored.owned if number not in self._catalog]
        if unknown:
            logger.warning("Ignoring stored counts for unknown elements: %s", sorted(unknown))
        self._ledger.restore(
            {number: count for number, count in stored.owned.items() if number in self._catalog}
        )
        self._wallet = Wallet(coins=stored.coins, dust=stored.dust)
        self._history.restore(stored.recent)
        self._last_result = self._history.latest()

    async def _persist(self) -> None:
        if not await self._writer.write(self.snapshot()):
            logger.warning("Lab state not yet persisted; in-memory state remains authoritative.")
