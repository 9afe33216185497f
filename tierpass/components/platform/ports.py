"""
Platform component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from tierpass.domain.entities import PlatformState


class PlatformStateRepoPort(Protocol):
    """Repository for the single platform state row."""

    def find(self) -> PlatformState | None:
        """Get platform state, or None before initialization."""
        ...

    def get(self) -> PlatformState:
        """Get platform state. Raises PlatformNotInitializedError if not initialized."""
        ...

    def save(self, state: PlatformState) -> PlatformState:
        """Persist platform state (upsert)."""
        ...


class CustodyPort(Protocol):
    """The part of the value transfer port the fee sweep needs."""

    def custody_balance(self) -> int:
        """Total value held by the platform."""
        ...

    def pay_out(self, recipient: str, amount: int) -> None:
        """Move amount from custody to recipient."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
