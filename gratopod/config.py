"""Configuration models for gratopod."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Literal, Mapping

StorageBackend = Literal["memory", "json", "sqlalchemy"]


@dataclass(slots=True)
class StorageConfig:
    """Configure where lab state is persisted."""

    backend: StorageBackend = "memory"
    path: str = "./gratopod-state.json"
    dsn: str | None = None
    echo_sql: bool = False
    profile: str = "local"
    retry_attempts: int = 5
    retry_base_delay: float = 0.5
    retry_max_delay: float = 30.0
    write_timeout: float | None = 10.0

    def resolve_dsn(self) -> str | None:
        if self.dsn:
            return self.dsn
        if self.backend == "sqlalchemy":
            return "sqlite+aiosqlite:///./gratopod.db"
        return None


@dataclass(slots=True)
class EconomyConfig:
    """Rules of the pack economy."""

    open_cost: int = 200
    starting_coins: int = 5000
    history_size: int = 8
    rarity_weights: Mapping[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class AdminConfig:
    """Who may grant coins outside of development mode."""

    admin_ids: set[str] = field(default_factory=set)
    allow_self_grant: bool = False
    enable_audit_logs: bool = True


@dataclass(slots=True)
class LabConfig:
    """Top-level configuration container."""

    catalog_path: str | None = None
    storage: StorageConfig = field(default_factory=StorageConfig)
    economy: EconomyConfig = field(default_factory=EconomyConfig)
    admin: AdminConfig = field(default_factory=AdminConfig)
    rng_seed: int | None = None

    @classmethod
    def from_env(cls) -> "LabConfig":
        """Create config from environment variables prefixed with GRATOPOD_."""
        prefix = "GRATOPOD_"
        storage = StorageConfig(
            backend=os.getenv(f"{prefix}STORAGE_BACKEND", "memory"),  # type: ignore[arg-type]
            path=os.getenv(f"{prefix}STORAGE_PATH", "./gratopod-state.json"),
            dsn=os.getenv(f"{prefix}STORAGE_DSN"),
            echo_sql=_flag(os.getenv(f"{prefix}STORAGE_ECHO_SQL", "false")),
            profile=os.getenv(f"{prefix}STORAGE_PROFILE", "local") or "local",
            retry_attempts=int(os.getenv(f"{prefix}STORAGE_RETRY_ATTEMPTS", "5")),
            retry_base_delay=float(os.getenv(f"{prefix}STORAGE_RETRY_DELAY", "0.5")),
            retry_max_delay=float(os.getenv(f"{prefix}STORAGE_RETRY_MAX_DELAY", "30")),
            write_timeout=_timeout(os.getenv(f"{prefix}STORAGE_WRITE_TIMEOUT", "10")),
        )

        economy = EconomyConfig(
            open_cost=int(os.getenv(f"{prefix}OPEN_COST", "200")),
            starting_coins=int(os.getenv(f"{prefix}STARTING_COINS", "5000")),
            history_size=int(os.getenv(f"{prefix}HISTORY_SIZE", "8")),
            rarity_weights=_parse_rarity_weights(os.getenv(f"{prefix}RARITY_WEIGHTS")),
        )

        admin = AdminConfig(
            admin_ids={
                _id.strip()
                for _id in os.getenv(f"{prefix}ADMIN_IDS", "").split(",")
                if _id.strip()
            },
            allow_self_grant=_flag(os.getenv(f"{prefix}ALLOW_SELF_GRANT", "false")),
            enable_audit_logs=_flag(os.getenv(f"{prefix}ADMIN_ENABLE_AUDIT_LOGS", "true")),
        )

        return cls(
            catalog_path=os.getenv(f"{prefix}CATALOG_PATH") or None,
            storage=storage,
            economy=economy,
            admin=admin,
            rng_seed=(
                int(os.getenv(f"{prefix}RNG_SEED")) if os.getenv(f"{prefix}RNG_SEED") else None
            ),
        )


def _flag(raw: str) -> bool:
    return raw.lower() in {"1", "true", "yes"}


def _timeout(raw: str) -> float | None:
    """Seconds to wait for a save; zero or an empty value disables the bound."""
    value = float(raw) if raw.strip() else 0.0
    return value if value > 0 else None


def _parse_rarity_weights(raw: str | None) -> Mapping[str, float]:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON for GRATOPOD_RARITY_WEIGHTS") from exc
    if not isinstance(data, dict):
        raise ValueError("GRATOPOD_RARITY_WEIGHTS must be a JSON object")
    return {str(k): float(v) for k, v in data.items()}
