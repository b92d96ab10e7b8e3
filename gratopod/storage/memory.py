"""In-memory storage backend."""

from __future__ import annotations

from collections import deque
from dataclasses import replace
from datetime import datetime, timezone
from typing import Deque

from .base import AuditStore, LabState, StateStore


class InMemoryStateStore(StateStore):
    def __init__(self, initial: LabState | None = None) -> None:
        self._state = _copy(initial) if initial else None
        self.saves = 0

    async def load(self) -> LabState | None:
        return _copy(self._state) if self._state else None

    async def save(self, state: LabState) -> None:
        self._state = _copy(state)
        self.saves += 1

    @property
    def state(self) -> LabState | None:
        return self._state


class InMemoryAuditStore(AuditStore):
    def __init__(self, *, maxlen: int = 1000) -> None:
        self._entries: Deque[tuple[datetime, str, dict]] = deque(maxlen=maxlen)

    async def add_entry(self, action: str, payload: dict) -> None:
        self._entries.append((datetime.now(timezone.utc), action, payload))

    def dump(self) -> list[tuple[datetime, str, dict]]:
        return list(self._entries)


def _copy(state: LabState) -> LabState:
    return replace(state, owned=dict(state.owned), recent=tuple(state.recent))
