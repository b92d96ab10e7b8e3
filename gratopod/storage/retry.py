"""Background retry of failed state writes."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..domain.exceptions import PersistenceError
from .base import LabState, StateStore

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class RetryingStateWriter:
    """Write full-state snapshots, retrying failures in a background task.

    Every write is a full overwrite, so retrying is idempotent. Only the most
    recent snapshot is ever retried; a newer write supersedes a pending one.
    Any exception from the store counts as a failed write, and a save that
    outlasts ``write_timeout`` seconds is cancelled and retried.
    """

    def __init__(
        self,
        store: StateStore,
        *,
        attempts: int = 5,
        base_delay: float = 0.5,
        max_delay: float = 30.0,
        write_timeout: float | None = 10.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._store = store
        self._attempts = attempts
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._write_timeout = write_timeout
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._pending: LabState | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    @property
    def retrying(self) -> bool:
        return self._task is not None and not self._task.done()

    async def write(self, state: LabState) -> bool:
        """Persist ``state``. Returns False when the write was queued for retry."""
        self._pending = state
        if self.retrying:
            logger.debug("State write queued behind running retry loop.")
            return False
        try:
            await self._attempt()
        except PersistenceError as exc:
            logger.warning("State write failed, scheduling retry: %s", exc)
        except asyncio.TimeoutError:
            logger.warning(
                "State write did not finish within %ss, scheduling retry.", self._write_timeout
            )
        except Exception:
            logger.warning("State write raised unexpectedly, scheduling retry.", exc_info=True)
        else:
            return True
        self._schedule()
        return False

    async def flush(self) -> bool:
        """Wait for an in-flight retry loop. Returns True when nothing is pending."""
        if self._task is not None:
            await asyncio.shield(self._task)
        return not self.has_pending

    async def close(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None

    def _schedule(self) -> None:
        if self.retrying:
            return
        self._task = asyncio.get_running_loop().create_task(self._retry_loop())

    async def _attempt(self) -> None:
        if self._write_timeout is None:
            await self._save_pending()
        else:
            await asyncio.wait_for(self._save_pending(), self._write_timeout)

    async def _save_pending(self) -> None:
        async with self._lock:
            snapshot = self._pending
            if snapshot is None:
                return
            await self._store.save(snapshot)
            if self._pending is snapshot:
                self._pending = None

    async def _retry_loop(self) -> None:
        attempt = 0
        while self.has_pending:
            if attempt >= self._attempts:
                logger.error(
                    "Giving up on state write after %s retries; latest state stays pending.",
                    attempt,
                )
                return
            delay = min(self._base_delay * (2**attempt), self._max_delay)
            attempt += 1
            await self._sleep(delay)
            try:
                await self._attempt()
            except Exception:
                logger.warning(
                    "State write retry %s/%s failed.", attempt, self._attempts, exc_info=True
                )
                continue
            logger.info("State write succeeded on retry %s.", attempt)
