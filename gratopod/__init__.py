"""GratoPod pack-opening lab public API."""

from .app import LabApp
from .config import LabConfig
from .domain.engine import OpenAttempt, OpenStatus, PackEngine

__all__ = [
    "LabApp",
    "LabConfig",
    "OpenAttempt",
    "OpenStatus",
    "PackEngine",
]
