"""
Regression tests for platform-wide invariants.
"""

from datetime import timedelta

import pytest

from tierpass.adapters.sqlite.store import SQLiteStore
from tierpass.adapters.value_transfer_stub import InMemoryValueTransfer
from tierpass.domain.errors import PreconditionFailedError, TierPassError
from tierpass.rules.models import Rules
from tierpass.services.platform import TierPassService, create_service

ADMIN = "admin"
CREATOR = "carol"
DAY = timedelta(days=1)


def _snapshot(service: TierPassService) -> tuple:
    state = service.get_platform_state()
    return (
        state.state.model_dump(),
        state.custody_balance,
        service.list_events(limit=500).total,
        service.get_earnings(CREATOR),
        service.list_creators(),
    )


# --- Worked scenario ---
def test_worked_scenario(with_creator: TierPassService, clock) -> None:  # type: ignore[no-untyped-def]
    """Unit price 100 credits nothing; after raising it to 1000 each view credits 9."""
    service = with_creator
    service.update_subscription_price(ADMIN, 100)

    cid = service.create_content(CREATOR, "Intro", "ipfs://intro", 2)
    assert cid == 1

    service.purchase_subscription("alice", 2, 200)
    assert service.access_content("alice", cid) == "ipfs://intro"
    assert service.get_earnings(CREATOR) == 0

    service.update_subscription_price(ADMIN, 1000)
    service.access_content("alice", cid)
    assert service.get_earnings(CREATOR) == 9

    assert service.withdraw_earnings(CREATOR) == 9
    with pytest.raises(PreconditionFailedError):
        service.withdraw_earnings(CREATOR)

    clock.advance(60 * DAY)
    with pytest.raises(PreconditionFailedError) as exc:
        service.access_content("alice", cid)
    assert exc.value.code == "no_active_subscription"


# --- Downgrade gates immediately ---
def test_downgrade_applies_to_live_window(with_creator: TierPassService) -> None:
    service = with_creator
    cid = service.create_content(CREATOR, "VIP only", "ipfs://vip", 3)
    service.purchase_subscription("alice", 3, 3000)
    service.access_content("alice", cid)

    service.purchase_subscription("alice", 1, 1000)

    with pytest.raises(PreconditionFailedError) as exc:
        service.access_content("alice", cid)
    assert exc.value.code == "tier_too_low"


# --- Rejected operations leave no trace ---
@pytest.mark.parametrize(
    "operation",
    [
        lambda s: s.purchase_subscription("alice", 1, 999),
        lambda s: s.purchase_subscription("alice", 9, 9999),
        lambda s: s.create_content("mallory", "x", "y", 1),
        lambda s: s.create_content(CREATOR, "", "y", 1),
        lambda s: s.access_content("alice", 1),
        lambda s: s.deactivate_content(ADMIN, 5),
        lambda s: s.withdraw_earnings(CREATOR),
        lambda s: s.add_content_creator("mallory", "mallory"),
        lambda s: s.update_subscription_price("mallory", 1),
        lambda s: s.pause_platform("mallory"),
        lambda s: s.withdraw_platform_fees("mallory"),
    ],
)
def test_rejected_operation_changes_nothing(with_creator: TierPassService, operation) -> None:  # type: ignore[no-untyped-def]
    before = _snapshot(with_creator)

    with pytest.raises(TierPassError):
        operation(with_creator)

    assert _snapshot(with_creator) == before


# --- Content ids ---
def test_ids_never_reused(with_creator: TierPassService) -> None:
    service = with_creator
    first = service.create_content(CREATOR, "One", "ipfs://1", 1)
    service.deactivate_content(CREATOR, first)
    with pytest.raises(TierPassError):
        service.create_content(CREATOR, "", "ipfs://bad", 1)
    second = service.create_content(CREATOR, "Two", "ipfs://2", 1)

    assert (first, second) == (1, 2)
    assert service.get_content_details(first).is_active is False


# --- Pause does not gate anything ---
def test_pause_is_inert(with_creator: TierPassService) -> None:
    service = with_creator
    cid = service.create_content(CREATOR, "Intro", "ipfs://intro", 1)
    service.pause_platform(ADMIN)

    service.purchase_subscription("alice", 1, 1000)
    assert service.access_content("alice", cid) == "ipfs://intro"
    assert service.withdraw_earnings(CREATOR) == 9
    assert service.create_content(CREATOR, "Two", "ipfs://2", 1) == 2


# --- Fee sweep takes unwithdrawn earnings too ---
def test_fee_sweep_takes_creator_earnings(with_creator: TierPassService) -> None:
    service = with_creator
    service.update_subscription_price(ADMIN, 10_000)
    cid = service.create_content(CREATOR, "Intro", "ipfs://intro", 1)
    service.purchase_subscription("alice", 1, 10_000)
    service.access_content("alice", cid)
    assert service.get_earnings(CREATOR) == 90

    assert service.withdraw_platform_fees(ADMIN) == 10_000

    # The ledger still shows the credit, but custody cannot cover it
    assert service.get_earnings(CREATOR) == 90
    with pytest.raises(PreconditionFailedError) as exc:
        service.withdraw_earnings(CREATOR)
    assert exc.value.code == "insufficient_custody"
    assert service.get_earnings(CREATOR) == 90


# --- Re-entrant withdrawal ---
def test_reentrant_withdrawal_from_payout_hook(store: SQLiteStore, rules: Rules, clock) -> None:  # type: ignore[no-untyped-def]
    outcomes: list[str] = []
    holder: list[TierPassService] = []

    def hook(recipient: str, amount: int) -> None:
        try:
            holder[0].withdraw_earnings(recipient)
            outcomes.append("paid")
        except PreconditionFailedError as e:
            outcomes.append(e.code)

    service = create_service(store, rules, transfer=store.value_transfer(on_pay_out=hook), time=clock)
    holder.append(service)

    service.add_content_creator(ADMIN, CREATOR)
    cid = service.create_content(CREATOR, "Intro", "ipfs://intro", 1)
    service.purchase_subscription("alice", 1, 1000)
    service.access_content("alice", cid)
    service.access_content("alice", cid)

    assert service.withdraw_earnings(CREATOR) == 18
    assert outcomes == ["nothing_to_withdraw"]
    assert service.transfer.balance_of(CREATOR) == 18
    assert service.get_earnings(CREATOR) == 0
    withdrawn = service.list_events(name="EarningsWithdrawn")
    assert withdrawn.total == 1


def test_reentrant_withdrawal_with_in_memory_transfer(store: SQLiteStore, rules: Rules, clock) -> None:  # type: ignore[no-untyped-def]
    outcomes: list[str] = []
    transfer = InMemoryValueTransfer()
    service = create_service(store, rules, transfer=transfer, time=clock)

    def hook(recipient: str, amount: int) -> None:
        try:
            service.withdraw_earnings(recipient)
        except PreconditionFailedError as e:
            outcomes.append(e.code)

    transfer.on_pay_out = hook
    service.add_content_creator(ADMIN, CREATOR)
    cid = service.create_content(CREATOR, "Intro", "ipfs://intro", 1)
    service.purchase_subscription("alice", 1, 1000)
    service.access_content("alice", cid)

    assert service.withdraw_earnings(CREATOR) == 9
    assert outcomes == ["nothing_to_withdraw"]
    assert transfer.balance_of(CREATOR) == 9


# --- Failed payout returns value to custody ---
def test_failed_payout_cannot_pay_twice(store: SQLiteStore, rules: Rules, clock) -> None:  # type: ignore[no-untyped-def]
    transfer = InMemoryValueTransfer()
    service = create_service(store, rules, transfer=transfer, time=clock)

    def failing_hook(recipient: str, amount: int) -> None:
        raise ConnectionError("receiver unavailable")

    service.add_content_creator(ADMIN, CREATOR)
    cid = service.create_content(CREATOR, "Intro", "ipfs://intro", 1)
    service.purchase_subscription("alice", 1, 1000)
    service.access_content("alice", cid)

    transfer.on_pay_out = failing_hook
    with pytest.raises(ConnectionError):
        service.withdraw_earnings(CREATOR)

    assert service.get_earnings(CREATOR) == 9
    assert transfer.balance_of(CREATOR) == 0
    assert transfer.custody_balance() == 1000
    assert service.list_events(name="EarningsWithdrawn").total == 0

    transfer.on_pay_out = None
    assert service.withdraw_earnings(CREATOR) == 9
    assert transfer.balance_of(CREATOR) == 9
    assert transfer.custody_balance() == 991
