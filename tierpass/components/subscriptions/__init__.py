"""
Subscriptions component - entitlement windows, purchase and renewal.
"""

from .component import (
    compute_expiry,
    load_config_from_rules,
    require_active_subscription,
    run_purchase,
    run_status,
    tier_duration,
    tier_price,
)
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

__all__ = [
    # Functions
    "compute_expiry",
    "load_config_from_rules",
    "require_active_subscription",
    "run_purchase",
    "run_status",
    "tier_duration",
    "tier_price",
    # Models
    "DEFAULT_DURATIONS",
    "PurchaseInput",
    "PurchaseOutput",
    "StatusInput",
    "StatusOutput",
    "SubscriptionConfig",
    # Ports
    "PaymentReceiverPort",
    "PlatformStateRepoPort",
    "SubscriptionRepoPort",
    "TimePort",
]
