"""
TierPassService tests.

Runs the facade against an in-memory SQLite store with the ledger-backed
value transfer adapter.
"""

from datetime import timedelta

import pytest

from tierpass.adapters.sqlite.store import SQLiteStore
from tierpass.domain.errors import (
    InvalidArgumentError,
    PreconditionFailedError,
    UnauthorizedError,
)
from tierpass.services.platform import TierPassService

ADMIN = "admin"
CREATOR = "carol"
DAY = timedelta(days=1)


class TestInitialize:
    def test_state_from_rules(self, service: TierPassService) -> None:
        snapshot = service.get_platform_state()
        assert snapshot.state.administrator == ADMIN
        assert snapshot.state.unit_price == 1000
        assert snapshot.state.content_counter == 0
        assert snapshot.state.paused is False
        assert snapshot.custody_balance == 0

    def test_second_initialize_keeps_administrator(self, service: TierPassService) -> None:
        state = service.initialize("someone-else", 1)
        assert state.administrator == ADMIN
        assert state.unit_price == 1000

    def test_uninitialized_platform(self, store: SQLiteStore) -> None:
        service = TierPassService(store)

        with pytest.raises(PreconditionFailedError) as exc:
            service.purchase_subscription("alice", 1, 1000)
        assert exc.value.code == "not_initialized"

    def test_lookup_bugs_are_not_masked(
        self, with_creator: TierPassService, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        cid = with_creator.create_content(CREATOR, "Intro", "ipfs://a", 1)

        def broken_get(content_id: int) -> None:
            raise KeyError("title")

        monkeypatch.setattr(with_creator.store.contents, "get", broken_get)

        with pytest.raises(KeyError):
            with_creator.get_content_details(cid)


class TestSubscriptions:
    def test_purchase_and_status(self, service: TierPassService, clock) -> None:  # type: ignore[no-untyped-def]
        sub = service.purchase_subscription("alice", 2, 2000)

        status = service.get_subscription_status("alice")
        assert status.effective_active is True
        assert status.tier == 2
        assert status.expires_at == sub.expires_at == clock.now_utc() + 60 * DAY
        assert service.get_platform_state().custody_balance == 2000

    def test_insufficient_payment_raises(self, service: TierPassService) -> None:
        with pytest.raises(PreconditionFailedError) as exc:
            service.purchase_subscription("alice", 3, 2999)
        assert exc.value.code == "insufficient_payment"
        assert service.get_subscription_status("alice").effective_active is False
        assert service.get_platform_state().custody_balance == 0

    def test_invalid_tier_raises(self, service: TierPassService) -> None:
        with pytest.raises(InvalidArgumentError) as exc:
            service.purchase_subscription("alice", 4, 10_000)
        assert exc.value.code == "invalid_tier"

    def test_renewal_is_additive(self, service: TierPassService, clock) -> None:  # type: ignore[no-untyped-def]
        first = service.purchase_subscription("alice", 1, 1000)
        clock.advance(10 * DAY)
        second = service.purchase_subscription("alice", 1, 1000)

        assert second.expires_at == first.expires_at + 30 * DAY

    def test_status_of_unknown(self, service: TierPassService) -> None:
        status = service.get_subscription_status("nobody")
        assert (status.effective_active, status.expires_at, status.tier) == (False, None, 0)


class TestCreators:
    def test_admin_manages_creators(self, service: TierPassService) -> None:
        service.add_content_creator(ADMIN, CREATOR)
        assert service.is_approved_creator(CREATOR)
        assert service.list_creators() == [CREATOR]

        service.remove_content_creator(ADMIN, CREATOR)
        assert not service.is_approved_creator(CREATOR)

    def test_non_admin_raises(self, service: TierPassService) -> None:
        with pytest.raises(UnauthorizedError) as exc:
            service.add_content_creator("mallory", "mallory")
        assert exc.value.code == "not_administrator"
        assert not service.is_approved_creator("mallory")

    def test_revocation_keeps_published_content(self, with_creator: TierPassService) -> None:
        service = with_creator
        cid = service.create_content(CREATOR, "Intro", "ipfs://a", 1)
        service.remove_content_creator(ADMIN, CREATOR)

        assert service.get_content_details(cid).is_active is True
        with pytest.raises(UnauthorizedError):
            service.create_content(CREATOR, "Another", "ipfs://b", 1)


class TestContent:
    def test_create_returns_sequential_ids(self, with_creator: TierPassService) -> None:
        assert with_creator.create_content(CREATOR, "One", "ipfs://1", 1) == 1
        assert with_creator.create_content(CREATOR, "Two", "ipfs://2", 2) == 2

    def test_details(self, with_creator: TierPassService, clock) -> None:  # type: ignore[no-untyped-def]
        cid = with_creator.create_content(CREATOR, "Intro", "ipfs://a", 2)
        details = with_creator.get_content_details(cid)

        assert details.title == "Intro"
        assert details.creator == CREATOR
        assert details.required_tier == 2
        assert details.created_at == clock.now_utc()
        assert details.is_active is True

    @pytest.mark.parametrize("content_id", [0, 1, 99])
    def test_details_invalid_id(self, service: TierPassService, content_id: int) -> None:
        with pytest.raises(InvalidArgumentError) as exc:
            service.get_content_details(content_id)
        assert exc.value.code == "invalid_content_id"

    def test_deactivate_by_admin(self, with_creator: TierPassService) -> None:
        cid = with_creator.create_content(CREATOR, "Intro", "ipfs://a", 1)
        with_creator.deactivate_content(ADMIN, cid)
        assert with_creator.get_content_details(cid).is_active is False

    def test_deactivate_by_stranger(self, with_creator: TierPassService) -> None:
        cid = with_creator.create_content(CREATOR, "Intro", "ipfs://a", 1)
        with pytest.raises(UnauthorizedError) as exc:
            with_creator.deactivate_content("mallory", cid)
        assert exc.value.code == "not_authorized"

    def test_list_contents(self, with_creator: TierPassService) -> None:
        with_creator.create_content(CREATOR, "One", "ipfs://1", 1)
        with_creator.create_content(CREATOR, "Two", "ipfs://2", 1)
        with_creator.deactivate_content(CREATOR, 1)

        page = with_creator.list_contents(active_only=True)
        assert [item.id for item in page.items] == [2]
        assert with_creator.list_contents().total == 2


class TestAccessAndEarnings:
    def test_access_credits_creator(self, with_creator: TierPassService) -> None:
        cid = with_creator.create_content(CREATOR, "Intro", "ipfs://a", 1)
        with_creator.purchase_subscription("alice", 1, 1000)

        assert with_creator.access_content("alice", cid) == "ipfs://a"
        assert with_creator.access_content("alice", cid) == "ipfs://a"
        assert with_creator.get_earnings(CREATOR) == 18

    def test_access_without_subscription(self, with_creator: TierPassService) -> None:
        with pytest.raises(PreconditionFailedError) as exc:
            with_creator.access_content("alice", 1)
        assert exc.value.code == "no_active_subscription"

    def test_withdraw_moves_value(self, with_creator: TierPassService) -> None:
        cid = with_creator.create_content(CREATOR, "Intro", "ipfs://a", 1)
        with_creator.purchase_subscription("alice", 1, 1000)
        with_creator.access_content("alice", cid)

        amount = with_creator.withdraw_earnings(CREATOR)

        assert amount == 9
        assert with_creator.get_earnings(CREATOR) == 0
        assert with_creator.transfer.balance_of(CREATOR) == 9
        assert with_creator.get_platform_state().custody_balance == 991

        with pytest.raises(PreconditionFailedError) as exc:
            with_creator.withdraw_earnings(CREATOR)
        assert exc.value.code == "nothing_to_withdraw"


class TestPlatformControl:
    def test_price_update_applies_to_next_purchase(self, service: TierPassService) -> None:
        service.update_subscription_price(ADMIN, 10)
        sub = service.purchase_subscription("alice", 3, 30)
        assert sub.tier == 3

    def test_price_update_requires_admin(self, service: TierPassService) -> None:
        with pytest.raises(UnauthorizedError):
            service.update_subscription_price("mallory", 1)
        assert service.get_platform_state().state.unit_price == 1000

    def test_pause_is_recorded(self, service: TierPassService) -> None:
        service.pause_platform(ADMIN)
        assert service.get_platform_state().state.paused is True
        service.unpause_platform(ADMIN)
        assert service.get_platform_state().state.paused is False

    def test_pause_requires_admin(self, service: TierPassService) -> None:
        with pytest.raises(UnauthorizedError):
            service.pause_platform("mallory")

    def test_fee_sweep(self, service: TierPassService) -> None:
        service.purchase_subscription("alice", 2, 2500)

        assert service.withdraw_platform_fees(ADMIN) == 2500
        assert service.transfer.balance_of(ADMIN) == 2500

        with pytest.raises(PreconditionFailedError) as exc:
            service.withdraw_platform_fees(ADMIN)
        assert exc.value.code == "no_balance"


class TestEvents:
    def test_operations_are_logged_in_order(self, with_creator: TierPassService) -> None:
        cid = with_creator.create_content(CREATOR, "Intro", "ipfs://a", 1)
        with_creator.purchase_subscription("alice", 1, 1000)
        with_creator.access_content("alice", cid)

        names = [e.name for e in with_creator.list_events().events]
        assert names == [
            "CreatorApprovalChanged",
            "ContentCreated",
            "SubscriptionPurchased",
            "ContentAccessed",
        ]

    def test_filter_by_name(self, with_creator: TierPassService) -> None:
        with_creator.purchase_subscription("alice", 1, 1000)
        result = with_creator.list_events(name="SubscriptionPurchased")
        assert result.total == 1
        assert result.events[0].payload["subscriber"] == "alice"
