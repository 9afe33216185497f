"""
Subscriptions component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from tierpass.domain.entities import PlatformState, Subscription


class SubscriptionRepoPort(Protocol):
    """Repository for subscriber entitlement records."""

    def get(self, subscriber: str) -> Subscription | None:
        """Get the record for subscriber, if any."""
        ...

    def save(self, subscription: Subscription) -> Subscription:
        """Insert or replace the record for subscription.subscriber."""
        ...


class PlatformStateRepoPort(Protocol):
    """Read access to platform parameters."""

    def get(self) -> PlatformState:
        """Get platform state."""
        ...


class PaymentReceiverPort(Protocol):
    """The part of the value transfer port a purchase needs."""

    def receive(self, payer: str, amount: int) -> None:
        """Accept payment into platform custody."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
