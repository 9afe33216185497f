"""
Events component - observable notification log.

Every committed operation appends its notifications to the same store, in
the same transaction, so a rejected operation never leaves an event behind.

Invariants:
- Events are immutable once appended
- Sequence numbers are strictly increasing
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from tierpass.domain.entities import Event, EventName

from .models import EventListOutput, ListEventsInput
from .ports import EventRepoPort

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 500


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def emit(
    repo: EventRepoPort,
    name: EventName,
    payload: dict[str, Any],
    now: datetime,
) -> Event:
    """Append a notification to the log."""
    event = Event(
        name=name,
        payload={key: _serialize(value) for key, value in payload.items()},
        created_at=now,
    )
    stored = repo.append(event)
    logger.debug("event %s #%s %s", name, stored.seq, stored.payload)
    return stored


def run_list(inp: ListEventsInput, *, repo: EventRepoPort) -> EventListOutput:
    """
    Read a page of the notification log.

    Args:
        inp: Optional event name filter and paging.
        repo: Event repository port.

    Returns:
        EventListOutput with events in sequence order.
    """
    limit = max(1, min(inp.limit, MAX_PAGE_SIZE))
    offset = max(0, inp.offset)
    events, total = repo.list(name=inp.name, limit=limit, offset=offset)
    return EventListOutput(events=events, total=total, limit=limit, offset=offset)
