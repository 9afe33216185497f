"""
Events component unit tests.
"""

from __future__ import annotations

from datetime import UTC, datetime

from tierpass.components.events import ListEventsInput, emit, run_list
from tierpass.domain.entities import Event, EventName


class MockEventRepo:
    """In-memory event log for testing."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def append(self, event: Event) -> Event:
        stored = event.model_copy(update={"seq": len(self.events) + 1})
        self.events.append(stored)
        return stored

    def list(
        self,
        *,
        name: EventName | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Event], int]:
        matching = [e for e in self.events if name is None or e.name == name]
        return matching[offset : offset + limit], len(matching)


NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


class TestEmit:
    def test_assigns_sequence_numbers(self) -> None:
        repo = MockEventRepo()
        first = emit(repo, "ContentAccessed", {"subscriber": "alice", "content_id": 1}, NOW)
        second = emit(repo, "ContentAccessed", {"subscriber": "bob", "content_id": 1}, NOW)

        assert first.seq == 1
        assert second.seq == 2

    def test_serializes_datetimes(self) -> None:
        """Datetime payload values are stored as ISO strings."""
        repo = MockEventRepo()
        event = emit(repo, "SubscriptionPurchased", {"expiration": NOW, "tier": 1}, NOW)

        assert event.payload["expiration"] == NOW.isoformat()
        assert event.payload["tier"] == 1


class TestList:
    def test_filters_by_name(self) -> None:
        repo = MockEventRepo()
        emit(repo, "ContentCreated", {"content_id": 1}, NOW)
        emit(repo, "ContentAccessed", {"content_id": 1}, NOW)
        emit(repo, "ContentCreated", {"content_id": 2}, NOW)

        result = run_list(ListEventsInput(name="ContentCreated"), repo=repo)

        assert result.success is True
        assert result.total == 2
        assert [e.payload["content_id"] for e in result.events] == [1, 2]

    def test_limit_is_clamped(self) -> None:
        repo = MockEventRepo()
        result = run_list(ListEventsInput(limit=10_000, offset=-5), repo=repo)

        assert result.limit == 500
        assert result.offset == 0

    def test_zero_limit_becomes_one(self) -> None:
        repo = MockEventRepo()
        emit(repo, "ContentCreated", {"content_id": 1}, NOW)
        emit(repo, "ContentCreated", {"content_id": 2}, NOW)

        result = run_list(ListEventsInput(limit=0), repo=repo)

        assert result.limit == 1
        assert len(result.events) == 1
        assert result.total == 2
