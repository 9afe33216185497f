"""
Access component - access gate and earnings distributor.

Gate order (first failure wins):
1. Entitlement: subscriber holds an active, unexpired subscription
2. Content ID within [1, content_counter]
3. Content is active
4. Subscriber tier >= content required tier

On success the creator is credited a fixed reward derived from the unit
price (independent of the content's own tier), and the locator is returned.
Integer division truncates, so low unit prices credit nothing while the
access itself still succeeds.
"""

from __future__ import annotations

from typing import Any

from tierpass.components.catalog import check_content_id
from tierpass.components.events import EventRepoPort, emit
from tierpass.components.subscriptions import require_active_subscription
from tierpass.domain.entities import Content, Subscription
from tierpass.domain.errors import OperationError, invalid_argument, precondition_failed

from .models import AccessConfig, AccessContentInput, AccessOutput
from .ports import (
    ContentReaderPort,
    EarningsCreditPort,
    PlatformStateRepoPort,
    SubscriptionReaderPort,
    TimePort,
)

# --- Pure Functions ---


def compute_view_reward(unit_price: int, config: AccessConfig | None = None) -> int:
    """Reward generated by one access."""
    config = config or AccessConfig()
    return unit_price // config.reward_divisor


def compute_creator_credit(view_reward: int, config: AccessConfig | None = None) -> int:
    """Creator's share of a view reward."""
    config = config or AccessConfig()
    return view_reward * config.creator_share_percent // 100


def can_access_tier(subscriber_tier: int, required_tier: int) -> bool:
    """Higher tiers include every lower tier."""
    return subscriber_tier >= required_tier


def _check_content(content: Content | None, content_id: int) -> OperationError | None:
    if content is None:
        return invalid_argument("invalid_content_id", f"Unknown content id {content_id}", "content_id")
    if not content.is_active:
        return precondition_failed("content_inactive", "Content is not active")
    return None


def _check_tier(subscription: Subscription, content: Content) -> OperationError | None:
    if not can_access_tier(subscription.tier, content.required_tier):
        return precondition_failed(
            "tier_too_low",
            f"Tier {subscription.tier} cannot access tier {content.required_tier} content",
        )
    return None


# --- Entry Point ---


def run_access(
    inp: AccessContentInput,
    *,
    subscriptions: SubscriptionReaderPort,
    contents: ContentReaderPort,
    state_repo: PlatformStateRepoPort,
    earnings: EarningsCreditPort,
    events: EventRepoPort,
    time: TimePort,
    config: AccessConfig | None = None,
) -> AccessOutput:
    """
    Gate an access request and distribute the view reward.

    Args:
        inp: Subscriber and content ID.
        subscriptions: Subscription records.
        contents: Content records.
        state_repo: Platform state (unit price, content counter).
        earnings: Earnings ledger credit side.
        events: Notification log.
        time: Time port.
        config: Revenue split.

    Returns:
        AccessOutput with the locator or errors.
    """
    now = time.now_utc()
    subscription = subscriptions.get(inp.subscriber)

    error = require_active_subscription(subscription, now)
    if error:
        return AccessOutput(errors=[error], success=False)
    assert subscription is not None

    state = state_repo.get()
    error = check_content_id(inp.content_id, state.content_counter)
    if error:
        return AccessOutput(errors=[error], success=False)

    content = contents.get(inp.content_id)
    error = _check_content(content, inp.content_id)
    if error:
        return AccessOutput(errors=[error], success=False)
    assert content is not None

    error = _check_tier(subscription, content)
    if error:
        return AccessOutput(errors=[error], success=False)

    credit = compute_creator_credit(compute_view_reward(state.unit_price, config), config)
    if credit > 0:
        earnings.credit(content.creator, credit)

    emit(
        events,
        "ContentAccessed",
        {"subscriber": inp.subscriber, "content_id": content.id},
        now,
    )

    return AccessOutput(
        locator=content.locator,
        content_id=content.id,
        creator=content.creator,
        creator_credit=credit,
    )


# --- Configuration Loader ---


def load_config_from_rules(rules: Any) -> AccessConfig:
    """
    Load AccessConfig from rules.yaml.

    Args:
        rules: Parsed Rules model (uses rules.rewards)

    Returns:
        AccessConfig instance
    """
    rewards = getattr(rules, "rewards", None)
    if rewards is None:
        return AccessConfig()
    return AccessConfig(
        reward_divisor=rewards.reward_divisor,
        creator_share_percent=rewards.creator_share_percent,
    )
