"""Domain models and services."""

from .catalog import DEFAULT_RARITY_TABLE, Catalog, CatalogEntry, Rarity, RarityMeta, RarityTable
from .economy import Wallet
from .exceptions import (
    BusyError,
    ConfigurationError,
    InsufficientFundsError,
    LabError,
    PersistenceError,
)
from .history import PullHistory, PullResult
from .ledger import CollectionLedger, CollectionStats
from .roller import roll, tier_probabilities
from .engine import EngineState, OpenAttempt, OpenStatus, PackEngine

__all__ = [
    "DEFAULT_RARITY_TABLE",
    "Catalog",
    "CatalogEntry",
    "Rarity",
    "RarityMeta",
    "RarityTable",
    "Wallet",
    "BusyError",
    "ConfigurationError",
    "InsufficientFundsError",
    "LabError",
    "PersistenceError",
    "PullHistory",
    "PullResult",
    "CollectionLedger",
    "CollectionStats",
    "roll",
    "tier_probabilities",
    "EngineState",
    "OpenAttempt",
    "OpenStatus",
    "PackEngine",
]
