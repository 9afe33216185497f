from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from tierpass.adapters.sqlite.store import SQLiteStore
from tierpass.rules.loader import load_rules
from tierpass.rules.models import Rules
from tierpass.services.platform import TierPassService, create_service

PROJECT_ROOT = Path(__file__).parent.parent

ADMIN = "admin"
CREATOR = "carol"


class MockTimePort:
    """Mock time port for deterministic testing."""

    def __init__(self, fixed_time: datetime | None = None) -> None:
        self._time = fixed_time or datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._time

    def advance(self, delta: timedelta) -> None:
        self._time = self._time + delta


@pytest.fixture
def rules() -> Rules:
    """Real rules from the project root (administrator 'admin', unit price 1000)."""
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def clock() -> MockTimePort:
    return MockTimePort()


@pytest.fixture
def store() -> Iterator[SQLiteStore]:
    s = SQLiteStore(":memory:")
    s.migrate()
    yield s
    s.close()


@pytest.fixture
def service(store: SQLiteStore, rules: Rules, clock: MockTimePort) -> TierPassService:
    """Initialized service on an in-memory database with ledger-backed transfers."""
    return create_service(store, rules, time=clock)


@pytest.fixture
def with_creator(service: TierPassService) -> TierPassService:
    service.add_content_creator(ADMIN, CREATOR)
    return service
