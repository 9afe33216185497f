"""
Events component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tierpass.domain.entities import Event, EventName
from tierpass.domain.errors import OperationError


@dataclass(frozen=True)
class ListEventsInput:
    """Input for reading the notification log."""

    name: EventName | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class EventListOutput:
    """Output containing a page of events, oldest first."""

    events: list[Event]
    total: int
    limit: int
    offset: int
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True
