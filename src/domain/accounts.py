from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from .transactions import ClientId


@dataclass
class Account:
    """Balances of a single client.

    Operations only move funds; admission rules (locked accounts, insufficient
    funds) are enforced by the ledger engine before they are called. Balances
    may become negative when a chargeback hits funds that were already spent.
    """

    client_id: ClientId
    available: Decimal = field(default_factory=lambda: Decimal(0))
    held: Decimal = field(default_factory=lambda: Decimal(0))
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def deposit(self, amount: Decimal) -> None:
        self.available += amount

    def withdraw(self, amount: Decimal) -> None:
        self.available -= amount

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release(self, amount: Decimal) -> None:
        self.available += amount
        self.held -= amount

    def charge_back(self, amount: Decimal) -> None:
        # The disputed amount already left `available` when it was held.
        self.held -= amount
        self.locked = True
