"""Exceptions raised by gratopod domain services."""


class LabError(RuntimeError):
    """Base class for domain exceptions."""


class ConfigurationError(LabError):
    """Raised when the catalog or rarity table is malformed."""


class InsufficientFundsError(LabError):
    """Raised when the wallet cannot cover the pack cost."""

    def __init__(self, cost: int, balance: int) -> None:
        super().__init__(f"Insufficient coins: have {balance}, need {cost}")
        self.cost = cost
        self.balance = balance


class BusyError(LabError):
    """Raised when an open or reset is attempted while a pack is being opened."""


class PersistenceError(LabError):
    """Raised by state stores when a durable read or write fails."""
