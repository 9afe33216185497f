"""
Value transfer port interface.

External interface for moving value between principals and the platform's
custody balance. The substrate itself (chain, payment processor, bank ledger)
lives behind this port; operations here are atomic credit/debit primitives.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

# Custody account key used by ledger-backed adapters
CUSTODY_ACCOUNT = "__custody__"


class InsufficientCustodyError(Exception):
    """Raised when a payout exceeds the custody balance."""


class ValueTransferPort(Protocol):
    """
    Port for value movement.

    Implementations:
    - InMemoryValueTransfer: dict-backed dev adapter with a payout hook
    - SQLiteValueTransfer: accounts table in the platform database
    """

    def receive(self, payer: str, amount: int) -> None:
        """
        Accept a payment from payer into platform custody.

        Args:
            payer: Paying principal
            amount: Amount in the smallest currency unit
        """
        ...

    def pay_out(self, recipient: str, amount: int) -> None:
        """
        Move amount from platform custody to recipient's external balance.

        Raises:
            InsufficientCustodyError: custody holds less than amount
        """
        ...

    def custody_balance(self) -> int:
        """Total value currently held by the platform."""
        ...

    def balance_of(self, principal: str) -> int:
        """External balance paid out to principal so far."""
        ...

    def savepoint(self) -> AbstractContextManager[None]:
        """
        Scope whose value movements are undone if the block raises.

        Adapters sharing the store connection return a no-op scope; the store
        transaction already covers them.
        """
        ...
