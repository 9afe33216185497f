"""
Registry component unit tests.

Tests for the administrator gate and the creator allow-list.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tierpass.components.registry import (
    CheckCreatorInput,
    SetCreatorApprovalInput,
    require_administrator,
    require_approved_creator,
    run_check_creator,
    run_list_creators,
    run_set_creator_approval,
)
from tierpass.domain.entities import Event, PlatformState

ADMIN = "admin"

# --- Mock Implementations ---


class MockStateRepo:
    def __init__(self, state: PlatformState) -> None:
        self._state = state

    def get(self) -> PlatformState:
        return self._state.model_copy()


class MockApprovalRepo:
    def __init__(self) -> None:
        self._flags: dict[str, bool] = {}

    def is_approved(self, identity: str) -> bool:
        return self._flags.get(identity, False)

    def set_approved(self, identity: str, approved: bool, now: datetime) -> None:
        self._flags[identity] = approved

    def list_approved(self) -> list[str]:
        return sorted(k for k, v in self._flags.items() if v)


class MockEventRepo:
    def __init__(self) -> None:
        self.events: list[Event] = []

    def append(self, event: Event) -> Event:
        stored = event.model_copy(update={"seq": len(self.events) + 1})
        self.events.append(stored)
        return stored

    def list(self, *, name=None, limit=50, offset=0):  # type: ignore[no-untyped-def]
        return self.events, len(self.events)


class MockTimePort:
    """Mock time port for deterministic testing."""

    def __init__(self, fixed_time: datetime | None = None) -> None:
        self._time = fixed_time or datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._time

    def advance(self, delta: timedelta) -> None:
        self._time = self._time + delta


@pytest.fixture
def state_repo() -> MockStateRepo:
    return MockStateRepo(
        PlatformState(
            administrator=ADMIN,
            unit_price=1000,
            updated_at=datetime(2024, 1, 1, tzinfo=UTC),
        )
    )


@pytest.fixture
def approvals() -> MockApprovalRepo:
    return MockApprovalRepo()


@pytest.fixture
def events() -> MockEventRepo:
    return MockEventRepo()


def _set(
    caller: str,
    identity: str,
    approved: bool,
    state_repo: MockStateRepo,
    approvals: MockApprovalRepo,
    events: MockEventRepo,
):  # type: ignore[no-untyped-def]
    return run_set_creator_approval(
        SetCreatorApprovalInput(caller=caller, identity=identity, approved=approved),
        state_repo=state_repo,
        approval_repo=approvals,
        events=events,
        time=MockTimePort(),
    )


# --- Guard Tests ---


class TestGuards:
    def test_administrator_passes(self, state_repo: MockStateRepo) -> None:
        assert require_administrator(ADMIN, state_repo.get()) is None

    def test_non_administrator_rejected(self, state_repo: MockStateRepo) -> None:
        error = require_administrator("mallory", state_repo.get())
        assert error is not None
        assert error.kind == "unauthorized"
        assert error.code == "not_administrator"

    def test_unapproved_creator_rejected(self, approvals: MockApprovalRepo) -> None:
        error = require_approved_creator("carol", approvals)
        assert error is not None
        assert error.code == "not_approved_creator"


# --- Approval Tests ---


class TestSetCreatorApproval:
    def test_admin_adds_creator(
        self, state_repo: MockStateRepo, approvals: MockApprovalRepo, events: MockEventRepo
    ) -> None:
        result = _set(ADMIN, "carol", True, state_repo, approvals, events)

        assert result.success is True
        assert result.approved is True
        assert approvals.is_approved("carol")
        assert events.events[-1].name == "CreatorApprovalChanged"
        assert events.events[-1].payload == {"creator": "carol", "approved": True}

    def test_add_is_idempotent(
        self, state_repo: MockStateRepo, approvals: MockApprovalRepo, events: MockEventRepo
    ) -> None:
        _set(ADMIN, "carol", True, state_repo, approvals, events)
        result = _set(ADMIN, "carol", True, state_repo, approvals, events)

        assert result.success is True
        assert approvals.list_approved() == ["carol"]

    def test_remove_never_added_succeeds(
        self, state_repo: MockStateRepo, approvals: MockApprovalRepo, events: MockEventRepo
    ) -> None:
        result = _set(ADMIN, "dave", False, state_repo, approvals, events)

        assert result.success is True
        assert not approvals.is_approved("dave")

    def test_non_admin_rejected(
        self, state_repo: MockStateRepo, approvals: MockApprovalRepo, events: MockEventRepo
    ) -> None:
        result = _set("mallory", "carol", True, state_repo, approvals, events)

        assert result.success is False
        assert result.errors[0].code == "not_administrator"
        assert not approvals.is_approved("carol")
        assert events.events == []

    def test_admin_check_precedes_identity_check(
        self, state_repo: MockStateRepo, approvals: MockApprovalRepo, events: MockEventRepo
    ) -> None:
        result = _set("mallory", "", True, state_repo, approvals, events)
        assert result.errors[0].code == "not_administrator"

    def test_empty_identity_rejected(
        self, state_repo: MockStateRepo, approvals: MockApprovalRepo, events: MockEventRepo
    ) -> None:
        result = _set(ADMIN, "  ", True, state_repo, approvals, events)

        assert result.success is False
        assert result.errors[0].code == "empty_identity"
        assert result.errors[0].kind == "invalid_argument"


class TestReads:
    def test_check_creator(self, approvals: MockApprovalRepo) -> None:
        approvals.set_approved("carol", True, datetime.now(UTC))

        assert run_check_creator(CheckCreatorInput("carol"), approval_repo=approvals).approved
        assert not run_check_creator(CheckCreatorInput("dave"), approval_repo=approvals).approved

    def test_list_creators_excludes_revoked(self, approvals: MockApprovalRepo) -> None:
        now = datetime.now(UTC)
        approvals.set_approved("carol", True, now)
        approvals.set_approved("dave", True, now)
        approvals.set_approved("dave", False, now)

        assert run_list_creators(approval_repo=approvals).creators == ["carol"]
