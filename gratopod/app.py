"""Top level application object for the pack lab."""

from __future__ import annotations

from random import Random
from typing import Any

from .admin.service import AdminService
from .config import LabConfig
from .domain.catalog import DEFAULT_RARITY_TABLE, Catalog, RarityTable
from .domain.engine import PackEngine
from .domain.events import EventBus
from .domain.exceptions import ConfigurationError
from .loaders.json_loader import load_catalog_from_json
from .storage.base import AuditStore, StateStore
from .storage.json_file import JsonFileStateStore
from .storage.memory import InMemoryAuditStore, InMemoryStateStore
from .storage.retry import RetryingStateWriter
from .storage.sqlalchemy import AsyncSQLAlchemyStorage


class LabApp:
    """Central dependency container wiring catalog, storage and engine."""

    def __init__(
        self,
        config: LabConfig,
        *,
        catalog: Catalog | None = None,
        rarity_table: RarityTable | None = None,
        state_store: StateStore | None = None,
        audit_store: AuditStore | None = None,
        event_bus: EventBus | None = None,
        rng: Random | None = None,
    ) -> None:
        self.config = config
        self.event_bus = event_bus or EventBus()

        if catalog is None:
            if not config.catalog_path:
                raise ConfigurationError("No catalog supplied and catalog_path is not configured")
            definition = load_catalog_from_json(config.catalog_path)
            catalog = definition.catalog
            rarity_table = rarity_table or definition.rarity_table
        rarity_table = rarity_table or DEFAULT_RARITY_TABLE
        if config.economy.rarity_weights:
            rarity_table = rarity_table.with_weights(config.economy.rarity_weights)
        self.catalog = catalog
        self.rarity_table = rarity_table

        self._rng = rng or (Random(config.rng_seed) if config.rng_seed is not None else Random())

        self._sqlalchemy_storage: AsyncSQLAlchemyStorage | None = None
        self.state_store, self.audit_store = self._wire_storage(state_store, audit_store)

        storage = config.storage
        economy = config.economy
        self.engine = PackEngine(
            catalog=self.catalog,
            rarity_table=self.rarity_table,
            store=self.state_store,
            event_bus=self.event_bus,
            open_cost=economy.open_cost,
            starting_coins=economy.starting_coins,
            history_size=economy.history_size,
            rng=self._rng,
            writer=RetryingStateWriter(
                self.state_store,
                attempts=storage.retry_attempts,
                base_delay=storage.retry_base_delay,
                max_delay=storage.retry_max_delay,
                write_timeout=storage.write_timeout,
            ),
        )
        self.admin = AdminService(
            engine=self.engine,
            audit_store=self.audit_store,
            admin_config=config.admin,
            event_bus=self.event_bus,
        )

    def _wire_storage(
        self, state_store: StateStore | None, audit_store: AuditStore | None
    ) -> tuple[StateStore, AuditStore]:
        if state_store and audit_store:
            return state_store, audit_store

        backend = self.config.storage.backend
        if backend == "memory":
            return state_store or InMemoryStateStore(), audit_store or InMemoryAuditStore()
        if backend == "json":
            return (
                state_store
                or JsonFileStateStore(self.config.storage.path, self.catalog, self.rarity_table),
                audit_store or InMemoryAuditStore(),
            )
        if backend == "sqlalchemy":
            dsn = self.config.storage.resolve_dsn()
            if not dsn:
                raise ConfigurationError("SQLAlchemy backend requires a DSN")
            storage = AsyncSQLAlchemyStorage(dsn, echo=self.config.storage.echo_sql)
            self._sqlalchemy_storage = storage
            return (
                state_store
                or storage.state_store(self.config.storage.profile, self.catalog, self.rarity_table),
                audit_store or storage.audit_store(),
            )
        raise ConfigurationError(f"Unsupported storage backend {backend}")

    def snapshot(self) -> dict[str, Any]:
        """Export current configuration for debugging."""
        return {
            "storage": self.config.storage.backend,
            "catalog_size": len(self.catalog),
            "rarities": [meta.rarity.value for meta in self.rarity_table],
            "open_cost": self.engine.open_cost,
            "starting_coins": self.engine.starting_coins,
        }

    async def start(self) -> None:
        """Initialize storage resources and restore persisted state."""
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.init_models()
        await self.engine.load()

    async def shutdown(self) -> None:
        await self.engine.flush()
        await self.engine.close()
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.dispose()
