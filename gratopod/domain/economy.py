"""Economy primitives."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import InsufficientFundsError


@dataclass(slots=True)
class Wallet:
    """Coins spent to open packs and dust earned from duplicates."""

    coins: int = 0
    dust: int = 0

    def __post_init__(self) -> None:
        if self.coins < 0 or self.dust < 0:
            raise ValueError("Wallet balances cannot be negative")

    def can_afford(self, cost: int) -> bool:
        return self.coins >= cost

    def debit(self, cost: int) -> None:
        if cost < 0:
            raise ValueError("Cannot debit negative amount")
        if not self.can_afford(cost):
            raise InsufficientFundsError(cost=cost, balance=self.coins)
        self.coins -= cost

    def refund(self, cost: int) -> None:
        if cost < 0:
            raise ValueError("Cannot refund negative amount")
        self.coins += cost

    def credit_dust(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot credit negative amount")
        if amount:
            self.dust += amount

    def grant_coins(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot grant negative amount")
        self.coins += amount
