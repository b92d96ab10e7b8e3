"""Domain event dispatch."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, DefaultDict

PACK_OPENED = "pack.opened"
PROGRESS_RESET = "progress.reset"
COINS_GRANTED = "coins.granted"
ADMIN_COINS_GRANTED = "admin.coins.granted"

logger = logging.getLogger(__name__)

EventListener = Callable[[Any], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class CoinsGranted:
    amount: int
    balance: int


@dataclass(frozen=True, slots=True)
class ProgressReset:
    coins: int


class EventBus:
    """Async pub-sub used by the engine and admin tooling."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, list[EventListener]] = defaultdict(list)

    def subscribe(self, event_name: str, listener: EventListener) -> None:
        self._listeners[event_name].append(listener)

    async def publish(self, event_name: str, payload: Any) -> None:
        """Notify listeners in subscription order. A failing listener is logged and skipped."""
        for listener in list(self._listeners.get(event_name, ())):
            try:
                await listener(payload)
            except Exception:
                logger.exception("Listener %r failed while handling %s.", listener, event_name)
