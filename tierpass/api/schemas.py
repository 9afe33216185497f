from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from tierpass.domain.entities import ContentDetails, EventName


# --- Subscriptions ---
class PurchaseRequest(BaseModel):
    tier: int
    payment: int


class SubscriptionStatusResponse(BaseModel):
    subscriber: str
    effective_active: bool
    expires_at: datetime | None = None
    tier: int


# --- Content ---
class ContentCreateRequest(BaseModel):
    title: str
    locator: str
    required_tier: int


class ContentCreatedResponse(BaseModel):
    content_id: int


class ContentListResponse(BaseModel):
    items: list[ContentDetails]
    total: int
    limit: int
    offset: int


class AccessResponse(BaseModel):
    content_id: int
    locator: str


# --- Earnings ---
class BalanceResponse(BaseModel):
    identity: str
    balance: int


class AmountResponse(BaseModel):
    amount: int


# --- Admin ---
class PriceUpdateRequest(BaseModel):
    new_price: int


class CreatorResponse(BaseModel):
    identity: str
    approved: bool


class PlatformStateResponse(BaseModel):
    administrator: str
    unit_price: int
    content_counter: int
    paused: bool
    custody_balance: int
    updated_at: datetime


class EventResponse(BaseModel):
    seq: int
    name: EventName
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class EventListResponse(BaseModel):
    events: list[EventResponse]
    total: int
    limit: int
    offset: int
