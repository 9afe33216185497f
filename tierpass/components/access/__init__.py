"""
Access component - access gate and earnings distributor.
"""

from .component import (
    can_access_tier,
    compute_creator_credit,
    compute_view_reward,
    load_config_from_rules,
    run_access,
)
from .models import AccessConfig, AccessContentInput, AccessOutput
from .ports import (
    ContentReaderPort,
    EarningsCreditPort,
    PlatformStateRepoPort,
    SubscriptionReaderPort,
    TimePort,
)

__all__ = [
    # Functions
    "can_access_tier",
    "compute_creator_credit",
    "compute_view_reward",
    "load_config_from_rules",
    "run_access",
    # Models
    "AccessConfig",
    "AccessContentInput",
    "AccessOutput",
    # Ports
    "ContentReaderPort",
    "EarningsCreditPort",
    "PlatformStateRepoPort",
    "SubscriptionReaderPort",
    "TimePort",
]
