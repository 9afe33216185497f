"""
Access component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tierpass.domain.errors import OperationError

# --- Configuration ---


@dataclass(frozen=True)
class AccessConfig:
    """
    Revenue split applied on each successful access.

    view_reward = unit_price // reward_divisor
    creator_credit = view_reward * creator_share_percent // 100
    The remainder stays in platform custody without a ledger entry.
    """

    reward_divisor: int = 100
    creator_share_percent: int = 90


# --- Input Models ---


@dataclass(frozen=True)
class AccessContentInput:
    """Input for accessing a content item."""

    subscriber: str
    content_id: int


# --- Output Models ---


@dataclass(frozen=True)
class AccessOutput:
    """Output for an access: the locator and what the creator was credited."""

    locator: str | None = None
    content_id: int | None = None
    creator: str | None = None
    creator_credit: int = 0
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True
