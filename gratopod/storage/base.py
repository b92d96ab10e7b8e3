"""Storage abstractions used by the pack engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.history import PullResult


@dataclass(slots=True)
class LabState:
    """Full engine state as written to durable storage."""

    coins: int
    dust: int = 0
    owned: dict[int, int] = field(default_factory=dict)
    recent: tuple[PullResult, ...] = ()


class StateStore(Protocol):
    """Passive load/save channel. Implementations raise PersistenceError on failure."""

    async def load(self) -> LabState | None:
        ...

    async def save(self, state: LabState) -> None:
        ...


class AuditStore(Protocol):
    async def add_entry(self, action: str, payload: dict) -> None:
        ...
