"""Scenario client that drives the engine the way a UI handler would."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from ..domain.engine import OpenStatus, PackEngine


@dataclass(slots=True)
class TestMessage:
    __test__ = False

    text: str
    metadata: Dict[str, Any]


class TestClient:
    __test__ = False

    """Record user-facing messages for each engine interaction."""

    def __init__(self, engine: PackEngine) -> None:
        self._engine = engine
        self._log: List[TestMessage] = []

    async def open(self) -> OpenStatus:
        attempt = await self._engine.try_open_one()
        if attempt.status is OpenStatus.INSUFFICIENT_FUNDS:
            text = "Not enough coins"
            metadata: Dict[str, Any] = {"coins": self._engine.coins}
        elif attempt.status is OpenStatus.BUSY:
            text = "Pack already opening"
            metadata = {}
        else:
            result = attempt.result
            text = f"{'Duplicate' if result.is_duplicate else 'New'} #{result.entry.element_number}"
            metadata = {
                "element_number": result.entry.element_number,
                "dust": result.dust_awarded,
                "count": result.duplicate_count_after,
            }
        self._log.append(TestMessage(text=text, metadata=metadata))
        return attempt.status

    async def grant(self, amount: int) -> None:
        await self._engine.grant_coins(amount)
        self._log.append(
            TestMessage(text=f"Granted {amount} coins", metadata={"coins": self._engine.coins})
        )

    def history(self) -> List[TestMessage]:
        return list(self._log)
