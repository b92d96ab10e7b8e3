"""Administrative operations: the policy gate around coin grants."""

from __future__ import annotations

import logging

from ..config import AdminConfig
from ..domain.engine import PackEngine
from ..domain.events import ADMIN_COINS_GRANTED, EventBus
from ..storage.base import AuditStore

logger = logging.getLogger(__name__)


class NotAuthorized(PermissionError):
    """Raised when an actor may not perform an admin operation."""


class AdminService:
    def __init__(
        self,
        engine: PackEngine,
        audit_store: AuditStore,
        admin_config: AdminConfig,
        event_bus: EventBus,
    ) -> None:
        self._engine = engine
        self._audit_store = audit_store
        self._config = admin_config
        self._events = event_bus

    def is_admin(self, actor_id: str) -> bool:
        return self._config.allow_self_grant or actor_id in self._config.admin_ids

    async def grant_coins(self, actor_id: str, amount: int, *, reason: str | None = None) -> int:
        """Grant coins on behalf of ``actor_id`` and return the new balance."""
        if not self.is_admin(actor_id):
            logger.warning("Rejected coin grant of %s by %s.", amount, actor_id)
            raise NotAuthorized(f"{actor_id} may not grant coins")
        if amount <= 0:
            raise ValueError("Amount must be positive")
        await self._engine.grant_coins(amount)
        payload = {"actor_id": actor_id, "amount": amount, "reason": reason}
        await self._audit("grant_coins", payload)
        await self._events.publish(ADMIN_COINS_GRANTED, payload)
        return self._engine.coins

    async def reset_progress(self, actor_id: str) -> None:
        if not self.is_admin(actor_id):
            raise NotAuthorized(f"{actor_id} may not reset progress")
        await self._engine.reset_progress()
        await self._audit("reset_progress", {"actor_id": actor_id})

    async def _audit(self, action: str, payload: dict) -> None:
        if not self._config.enable_audit_logs:
            return
        await self._audit_store.add_entry(action, payload)
