"""
Registry component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from tierpass.domain.entities import PlatformState


class PlatformStateRepoPort(Protocol):
    """Repository for the single platform state row."""

    def get(self) -> PlatformState:
        """Get platform state. Raises PlatformNotInitializedError if not initialized."""
        ...


class CreatorApprovalRepoPort(Protocol):
    """Repository for the creator allow-list."""

    def is_approved(self, identity: str) -> bool:
        """Whether identity is currently approved."""
        ...

    def set_approved(self, identity: str, approved: bool, now: datetime) -> None:
        """Set the approval flag (upsert)."""
        ...

    def list_approved(self) -> list[str]:
        """All currently approved identities, sorted."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
