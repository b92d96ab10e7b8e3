"""Pull results and the bounded recent-pulls buffer."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable

from .catalog import CatalogEntry


@dataclass(frozen=True, slots=True)
class PullResult:
    entry: CatalogEntry
    is_duplicate: bool
    duplicate_count_after: int
    dust_awarded: int
    rarity_index: int = 0


class PullHistory:
    """Most recent pulls, newest first. The oldest result drops on overflow."""

    def __init__(self, *, capacity: int = 8) -> None:
        if capacity <= 0:
            raise ValueError("History capacity must be positive")
        self._results: Deque[PullResult] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._results.maxlen or 0

    def push(self, result: PullResult) -> None:
        self._results.appendleft(result)

    def restore(self, results: Iterable[PullResult]) -> None:
        """Load results already ordered newest first."""
        self._results.clear()
        for result in results:
            if len(self._results) == self.capacity:
                break
            self._results.append(result)

    def latest(self) -> PullResult | None:
        return self._results[0] if self._results else None

    def snapshot(self) -> tuple[PullResult, ...]:
        return tuple(self._results)

    def clear(self) -> None:
        self._results.clear()

    def __len__(self) -> int:
        return len(self._results)
