from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

# --- Enums / Literals ---
Principal = str  # Opaque caller address
TierLevel = Literal[1, 2, 3]
EventName = Literal[
    "SubscriptionPurchased",
    "ContentCreated",
    "ContentAccessed",
    "ContentDeactivated",
    "EarningsWithdrawn",
    "CreatorApprovalChanged",
    "SubscriptionPriceUpdated",
    "PlatformPauseChanged",
    "PlatformFeesWithdrawn",
]

VALID_TIERS: frozenset[int] = frozenset({1, 2, 3})

TIER_NAMES: dict[int, str] = {1: "Basic", 2: "Premium", 3: "VIP"}


def is_valid_tier(tier: int) -> bool:
    return tier in VALID_TIERS


# --- Subscriptions ---

class Subscription(BaseModel):
    subscriber: Principal
    is_active: bool = False
    expires_at: datetime
    tier: int

    def is_effective(self, now: datetime) -> bool:
        """Active flag set and expiry still ahead of now."""
        return self.is_active and self.expires_at > now


# --- Content ---

class Content(BaseModel):
    id: int
    title: str
    locator: str  # Opaque off-system reference, returned only by access
    creator: Principal
    required_tier: int
    created_at: datetime
    is_active: bool = True


class ContentDetails(BaseModel):
    """Public view of a content record (no locator)."""
    id: int
    title: str
    creator: Principal
    required_tier: int
    created_at: datetime
    is_active: bool

    @classmethod
    def from_content(cls, content: Content) -> "ContentDetails":
        return cls(
            id=content.id,
            title=content.title,
            creator=content.creator,
            required_tier=content.required_tier,
            created_at=content.created_at,
            is_active=content.is_active,
        )


# --- Platform ---

class PlatformState(BaseModel):
    administrator: Principal
    unit_price: int
    content_counter: int = 0
    paused: bool = False
    updated_at: datetime


# --- Notifications ---

class Event(BaseModel):
    seq: int | None = None
    name: EventName
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
