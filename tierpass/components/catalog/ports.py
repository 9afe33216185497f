"""
Catalog component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from tierpass.domain.entities import Content, PlatformState


class ContentRepoPort(Protocol):
    """Repository interface for content records."""

    def get(self, content_id: int) -> Content | None:
        """Get content by ID."""
        ...

    def save(self, content: Content) -> Content:
        """Insert or update content."""
        ...

    def list(
        self,
        *,
        active_only: bool = False,
        creator: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Content], int]:
        """List content by ID. Returns (items, total_count)."""
        ...


class PlatformStateRepoPort(Protocol):
    """Platform state access (content counter, administrator)."""

    def get(self) -> PlatformState:
        """Get platform state."""
        ...

    def save(self, state: PlatformState) -> PlatformState:
        """Persist platform state."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
