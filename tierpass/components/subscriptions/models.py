"""
Subscriptions component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from tierpass.domain.entities import Subscription
from tierpass.domain.errors import OperationError

# --- Configuration ---

DEFAULT_DURATIONS: dict[int, timedelta] = {
    1: timedelta(days=30),
    2: timedelta(days=60),
    3: timedelta(days=90),
}


@dataclass(frozen=True)
class SubscriptionConfig:
    """Entitlement window per tier. Price is unit_price × tier."""

    durations: dict[int, timedelta] = field(
        default_factory=lambda: dict(DEFAULT_DURATIONS)
    )


# --- Input Models ---


@dataclass(frozen=True)
class PurchaseInput:
    """Input for purchasing or renewing a subscription."""

    subscriber: str
    tier: int
    paid_amount: int


@dataclass(frozen=True)
class StatusInput:
    """Input for a subscription status lookup."""

    subscriber: str


# --- Output Models ---


@dataclass(frozen=True)
class PurchaseOutput:
    """Output for a purchase or renewal."""

    subscription: Subscription | None = None
    renewed: bool = False  # True when time was stacked onto a live window
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class StatusOutput:
    """Effective status: active flag AND expiry still ahead of now."""

    effective_active: bool
    expires_at: datetime | None
    tier: int
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True
