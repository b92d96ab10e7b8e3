"""Storage backends for gratopod."""

from .base import AuditStore, LabState, StateStore
from .memory import InMemoryAuditStore, InMemoryStateStore
from .json_file import JsonFileStateStore
from .retry import RetryingStateWriter
from .sqlalchemy import AsyncSQLAlchemyStorage

__all__ = [
    "AuditStore",
    "LabState",
    "StateStore",
    "InMemoryAuditStore",
    "InMemoryStateStore",
    "JsonFileStateStore",
    "RetryingStateWriter",
    "AsyncSQLAlchemyStorage",
]
