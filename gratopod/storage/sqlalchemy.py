"""SQLAlchemy storage backend for lab state."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer, String, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..domain.catalog import Catalog, RarityTable
from ..domain.exceptions import PersistenceError
from .base import AuditStore, LabState, StateStore
from .schema import decode_state, encode_state


class Base(DeclarativeBase):
    pass


class LabStateTable(Base):
    __tablename__ = "gratopod_lab_state"

    profile: Mapped[str] = mapped_column(String(255), primary_key=True)
    document: Mapped[dict] = mapped_column(JSON)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class AuditTable(Base):
    __tablename__ = "gratopod_audit_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    action: Mapped[str] = mapped_column(String(128))
    payload: Mapped[dict] = mapped_column(JSON)


class AsyncSQLAlchemyStorage:
    """Bundle of async stores backed by SQLAlchemy."""

    def __init__(self, dsn: str, *, echo: bool = False) -> None:
        self._engine = create_async_engine(dsn, echo=echo, future=True)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

    async def init_models(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    def state_store(
        self, profile: str, catalog: Catalog, rarity_table: RarityTable
    ) -> "AsyncSQLAlchemyStateStore":
        return AsyncSQLAlchemyStateStore(self._session_factory, profile, catalog, rarity_table)

    def audit_store(self) -> "AsyncSQLAlchemyAuditStore":
        return AsyncSQLAlchemyAuditStore(self._session_factory)


class AsyncSQLAlchemyStateStore(StateStore):
    """One row per profile holding the versioned state document."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        profile: str,
        catalog: Catalog,
        rarity_table: RarityTable,
    ) -> None:
        self._session_factory = session_factory
        self._profile = profile
        self._catalog = catalog
        self._rarity_table = rarity_table

    async def load(self) -> LabState | None:
        try:
            async with self._session_factory() as session:
                row = await session.get(LabStateTable, self._profile)
                document = dict(row.document) if row else None
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot load state for {self._profile}: {exc}") from exc
        if document is None:
            return None
        return decode_state(document, self._catalog, self._rarity_table)

    async def save(self, state: LabState) -> None:
        document = encode_state(state)
        now = datetime.now(timezone.utc)
        try:
            async with self._session_factory() as session:
                stmt = (
                    update(LabStateTable)
                    .where(LabStateTable.profile == self._profile)
                    .values(document=document, updated_at=now)
                )
                result = await session.execute(stmt)
                if result.rowcount == 0:
                    session.add(
                        LabStateTable(profile=self._profile, document=document, updated_at=now)
                    )
                await session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot save state for {self._profile}: {exc}") from exc


class AsyncSQLAlchemyAuditStore(AuditStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def add_entry(self, action: str, payload: dict) -> None:
        async with self._session_factory() as session:
            session.add(
                AuditTable(
                    created_at=datetime.now(timezone.utc),
                    action=action,
                    payload=dict(payload),
                )
            )
            await session.commit()
