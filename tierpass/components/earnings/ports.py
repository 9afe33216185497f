"""
Earnings component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class EarningsRepoPort(Protocol):
    """Repository for per-creator accrued balances."""

    def get_balance(self, creator: str) -> int:
        """Accrued balance, 0 for unknown creators."""
        ...

    def credit(self, creator: str, amount: int) -> int:
        """Add amount to creator's balance. Returns the new balance."""
        ...

    def clear(self, creator: str) -> None:
        """Reset creator's balance to zero."""
        ...


class PayoutPort(Protocol):
    """The part of the value transfer port a withdrawal needs."""

    def pay_out(self, recipient: str, amount: int) -> None:
        """Move amount from custody to recipient."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
