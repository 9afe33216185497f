"""
Access component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from tierpass.domain.entities import Content, PlatformState, Subscription


class SubscriptionReaderPort(Protocol):
    def get(self, subscriber: str) -> Subscription | None:
        ...


class ContentReaderPort(Protocol):
    def get(self, content_id: int) -> Content | None:
        ...


class PlatformStateRepoPort(Protocol):
    def get(self) -> PlatformState:
        ...


class EarningsCreditPort(Protocol):
    """Write side of the earnings ledger used by the distributor."""

    def credit(self, creator: str, amount: int) -> int:
        """Add amount to creator's balance. Returns the new balance."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
