"""Versioned document shape for persisted lab state."""

from __future__ import annotations

import logging
from typing import Any

from ..domain.catalog import Catalog, RarityTable
from ..domain.exceptions import PersistenceError
from ..domain.history import PullResult
from .base import LabState

SCHEMA_VERSION = 1

logger = logging.getLogger(__name__)


def encode_state(state: LabState) -> dict[str, Any]:
    return {
        "version": SCHEMA_VERSION,
        "coins": state.coins,
        "dust": state.dust,
        "owned": {str(number): count for number, count in sorted(state.owned.items())},
        "recent": [
            {
                "elementNumber": result.entry.element_number,
                "isDuplicate": result.is_duplicate,
                "duplicateCountAfter": result.duplicate_count_after,
                "dustAwarded": result.dust_awarded,
            }
            for result in state.recent
        ],
    }


def decode_state(data: Any, catalog: Catalog, rarity_table: RarityTable) -> LabState:
    """Rebuild state from a stored document.

    Entries that are no longer in the catalog are dropped so a shrunken
    manifest does not prevent loading.
    """
    if not isinstance(data, dict):
        raise PersistenceError("Stored state must be a JSON object")
    version = data.get("version")
    if version != SCHEMA_VERSION:
        raise PersistenceError(f"Unsupported state version {version!r}")

    coins = _non_negative_int(data.get("coins", 0), "coins")
    dust = _non_negative_int(data.get("dust", 0), "dust")

    owned_raw = data.get("owned") or {}
    if not isinstance(owned_raw, dict):
        raise PersistenceError("'owned' must be an object")
    owned: dict[int, int] = {}
    for raw_number, raw_count in owned_raw.items():
        number = _element_number(raw_number)
        count = _non_negative_int(raw_count, f"owned[{raw_number}]")
        if number not in catalog:
            logger.warning("Dropping owned count for unknown element %s.", number)
            continue
        if count:
            owned[number] = count

    recent_raw = data.get("recent") or []
    if not isinstance(recent_raw, list):
        raise PersistenceError("'recent' must be an array")
    recent: list[PullResult] = []
    for item in recent_raw:
        if not isinstance(item, dict):
            raise PersistenceError("'recent' items must be objects")
        number = _element_number(item.get("elementNumber"))
        if number not in catalog:
            logger.warning("Dropping history item for unknown element %s.", number)
            continue
        entry = catalog.get(number)
        recent.append(
            PullResult(
                entry=entry,
                is_duplicate=bool(item.get("isDuplicate", False)),
                duplicate_count_after=_non_negative_int(
                    item.get("duplicateCountAfter", 1), "duplicateCountAfter"
                ),
                dust_awarded=_non_negative_int(item.get("dustAwarded", 0), "dustAwarded"),
                rarity_index=rarity_table.index_of(entry.rarity),
            )
        )

    return LabState(coins=coins, dust=dust, owned=owned, recent=tuple(recent))


def _element_number(raw: Any) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise PersistenceError(f"Invalid element number {raw!r}") from exc


def _non_negative_int(raw: Any, name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise PersistenceError(f"'{name}' must be a non-negative integer, got {raw!r}")
    return raw
