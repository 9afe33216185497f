"""
Subscriptions component - entitlement windows and renewal.

Manages one entitlement record per subscriber. Expiry is never applied
eagerly: a record is effective only while is_active is set and expires_at
is still ahead of the instant being checked.

Renewal rules:
- Live record (active and not expired): expires_at += duration(new tier)
- Otherwise: expires_at = now + duration(new tier)
- The stored tier is always replaced by the purchased tier, so a mid-window
  downgrade gates access at the lower tier immediately

Pricing: unit_price × tier, paid in full up front. Overpayment is accepted
and kept in custody.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from tierpass.components.events import EventRepoPort, emit
from tierpass.domain.entities import Subscription, is_valid_tier
from tierpass.domain.errors import OperationError, invalid_argument, precondition_failed

from .models import (
    DEFAULT_DURATIONS,
    PurchaseInput,
    PurchaseOutput,
    StatusInput,
    StatusOutput,
    SubscriptionConfig,
)
from .ports import (
    PaymentReceiverPort,
    PlatformStateRepoPort,
    SubscriptionRepoPort,
    TimePort,
)

# --- Pure Functions ---


def tier_price(unit_price: int, tier: int) -> int:
    """Linear price for a tier."""
    return unit_price * tier


def tier_duration(tier: int, config: SubscriptionConfig | None = None) -> timedelta:
    """Entitlement window bought by one purchase of tier."""
    config = config or SubscriptionConfig()
    return config.durations[tier]


def compute_expiry(
    existing: Subscription | None,
    duration: timedelta,
    now: datetime,
) -> tuple[datetime, bool]:
    """
    Compute the new expiry for a purchase.

    Returns:
        (new_expiry, renewed) where renewed means time was stacked onto a
        live window instead of starting from now.
    """
    if existing is not None and existing.is_effective(now):
        return existing.expires_at + duration, True
    return now + duration, False


def _validate_purchase(
    inp: PurchaseInput,
    unit_price: int,
) -> OperationError | None:
    if not is_valid_tier(inp.tier):
        return invalid_argument("invalid_tier", "Tier must be 1, 2 or 3", "tier")

    if inp.paid_amount < 0:
        return invalid_argument("invalid_amount", "Payment cannot be negative", "paid_amount")

    required = tier_price(unit_price, inp.tier)
    if inp.paid_amount < required:
        return precondition_failed(
            "insufficient_payment",
            f"Tier {inp.tier} costs {required}, received {inp.paid_amount}",
        )

    return None


# --- Guards ---


def require_active_subscription(
    subscription: Subscription | None,
    now: datetime,
) -> OperationError | None:
    """Entitlement gate: the record must be active and unexpired at now."""
    if subscription is None or not subscription.is_effective(now):
        return precondition_failed("no_active_subscription", "No active subscription")
    return None


# --- Entry Points ---


def run_purchase(
    inp: PurchaseInput,
    *,
    repo: SubscriptionRepoPort,
    state_repo: PlatformStateRepoPort,
    transfer: PaymentReceiverPort,
    events: EventRepoPort,
    time: TimePort,
    config: SubscriptionConfig | None = None,
) -> PurchaseOutput:
    """
    Purchase a subscription or renew the caller's existing one.

    Args:
        inp: Subscriber, tier and the amount paid.
        repo: Subscription repository.
        state_repo: Platform state (for the unit price).
        transfer: Receives the payment into custody.
        events: Notification log.
        time: Time port.
        config: Tier durations.

    Returns:
        PurchaseOutput with the stored record or errors.
    """
    config = config or SubscriptionConfig()
    state = state_repo.get()

    error = _validate_purchase(inp, state.unit_price)
    if error:
        return PurchaseOutput(errors=[error], success=False)

    now = time.now_utc()
    existing = repo.get(inp.subscriber)
    expires_at, renewed = compute_expiry(existing, tier_duration(inp.tier, config), now)

    subscription = Subscription(
        subscriber=inp.subscriber,
        is_active=True,
        expires_at=expires_at,
        tier=inp.tier,
    )
    repo.save(subscription)
    transfer.receive(inp.subscriber, inp.paid_amount)

    emit(
        events,
        "SubscriptionPurchased",
        {
            "subscriber": inp.subscriber,
            "expiration": expires_at,
            "tier": inp.tier,
        },
        now,
    )

    return PurchaseOutput(subscription=subscription, renewed=renewed)


def run_status(
    inp: StatusInput,
    *,
    repo: SubscriptionRepoPort,
    time: TimePort,
) -> StatusOutput:
    """
    Read a subscriber's effective status.

    Unknown subscribers report inactive with no expiry and tier 0.
    """
    subscription = repo.get(inp.subscriber)
    if subscription is None:
        return StatusOutput(effective_active=False, expires_at=None, tier=0)

    return StatusOutput(
        effective_active=subscription.is_effective(time.now_utc()),
        expires_at=subscription.expires_at,
        tier=subscription.tier,
    )


# --- Configuration Loader ---


def load_config_from_rules(rules: Any) -> SubscriptionConfig:
    """
    Load SubscriptionConfig from rules.yaml.

    Args:
        rules: Parsed Rules model (uses rules.tiers)

    Returns:
        SubscriptionConfig instance
    """
    tiers = getattr(rules, "tiers", None) or []
    durations = {tier.level: timedelta(days=tier.duration_days) for tier in tiers}
    return SubscriptionConfig(durations=durations or dict(DEFAULT_DURATIONS))
