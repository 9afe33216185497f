"""
Events component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from tierpass.domain.entities import Event, EventName


class EventRepoPort(Protocol):
    """Append-only notification log."""

    def append(self, event: Event) -> Event:
        """Store an event and return it with its sequence number."""
        ...

    def list(
        self,
        *,
        name: EventName | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Event], int]:
        """List events in sequence order. Returns (events, total_count)."""
        ...
