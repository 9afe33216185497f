"""
TierPass service facade.

Binds the components to a SQLiteStore and a value transfer adapter. Every
public operation runs inside one store transaction and a transfer savepoint:
a rejected or failing operation rolls back its writes and returns any value
it moved. Rejections surface as TierPassError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from tierpass.adapters.clock import SystemClock
from tierpass.adapters.sqlite.store import SQLiteStore
from tierpass.components import access, catalog, earnings, events, platform, registry, subscriptions
from tierpass.core.ports.time import TimePort
from tierpass.core.ports.value_transfer import InsufficientCustodyError, ValueTransferPort
from tierpass.domain.entities import Content, ContentDetails, EventName, PlatformState, Subscription
from tierpass.domain.errors import (
    PlatformNotInitializedError,
    TierPassError,
    precondition_failed,
    to_exception,
)
from tierpass.rules.models import Rules

logger = logging.getLogger(__name__)


def _check(result: Any) -> Any:
    """Raise the first error of a failed component output."""
    if not result.success:
        raise to_exception(result.errors[0])
    return result


class TierPassService:
    """
    Subscription platform service.

    Callers are opaque identity strings; the HTTP layer derives them from a
    bearer token and the CLI takes them from the command line.
    """

    def __init__(
        self,
        store: SQLiteStore,
        transfer: ValueTransferPort | None = None,
        time: TimePort | None = None,
        rules: Rules | None = None,
    ) -> None:
        self.store = store
        self.transfer = transfer if transfer is not None else store.value_transfer()
        self.time = time or SystemClock()
        self.rules = rules
        self.subscription_config = subscriptions.load_config_from_rules(rules)
        self.access_config = access.load_config_from_rules(rules)

    @contextmanager
    def _operation(self, name: str) -> Iterator[SQLiteStore]:
        try:
            with self.store.transaction() as store, self.transfer.savepoint():
                yield store
        except TierPassError as e:
            logger.info("%s rejected: %s", name, e.code)
            raise
        except PlatformNotInitializedError as e:
            logger.info("%s rejected: platform not initialized", name)
            raise to_exception(precondition_failed("not_initialized", str(e))) from e
        except InsufficientCustodyError as e:
            logger.warning("%s rejected: %s", name, e)
            raise to_exception(precondition_failed("insufficient_custody", str(e))) from e

    # --- Setup ---

    def initialize(self, administrator: str, unit_price: int) -> PlatformState:
        """Create platform state on first run; later calls return it unchanged."""
        with self._operation("initialize") as store:
            result = _check(
                platform.run_initialize(
                    platform.InitializeInput(administrator=administrator, unit_price=unit_price),
                    state_repo=store.platform_state,
                    time=self.time,
                )
            )
        if result.created:
            logger.info("Platform initialized: administrator=%s unit_price=%d", administrator, unit_price)
        elif result.state.administrator != administrator:
            logger.warning(
                "Platform already initialized with administrator=%s; ignoring %s",
                result.state.administrator,
                administrator,
            )
        return result.state

    # --- Subscriptions ---

    def purchase_subscription(self, caller: str, tier: int, payment: int) -> Subscription:
        with self._operation("purchase_subscription") as store:
            result = _check(
                subscriptions.run_purchase(
                    subscriptions.PurchaseInput(subscriber=caller, tier=tier, paid_amount=payment),
                    repo=store.subscriptions,
                    state_repo=store.platform_state,
                    transfer=self.transfer,
                    events=store.events,
                    time=self.time,
                    config=self.subscription_config,
                )
            )
        logger.info(
            "Subscription %s: subscriber=%s tier=%d expires_at=%s",
            "renewed" if result.renewed else "purchased",
            caller,
            tier,
            result.subscription.expires_at.isoformat(),
        )
        return result.subscription

    def get_subscription_status(self, identity: str) -> subscriptions.StatusOutput:
        """(effective_active, expires_at, tier) evaluated at the current instant."""
        with self._operation("get_subscription_status") as store:
            return subscriptions.run_status(
                subscriptions.StatusInput(subscriber=identity),
                repo=store.subscriptions,
                time=self.time,
            )

    # --- Catalog ---

    def create_content(self, caller: str, title: str, locator: str, required_tier: int) -> int:
        with self._operation("create_content") as store:
            result = _check(
                catalog.run_create(
                    catalog.CreateContentInput(
                        creator=caller,
                        title=title,
                        locator=locator,
                        required_tier=required_tier,
                    ),
                    repo=store.contents,
                    state_repo=store.platform_state,
                    approval_repo=store.approvals,
                    events=store.events,
                    time=self.time,
                )
            )
        logger.info("Content created: id=%d creator=%s", result.content.id, caller)
        return result.content.id

    def deactivate_content(self, caller: str, content_id: int) -> Content:
        with self._operation("deactivate_content") as store:
            result = _check(
                catalog.run_deactivate(
                    catalog.DeactivateContentInput(caller=caller, content_id=content_id),
                    repo=store.contents,
                    state_repo=store.platform_state,
                    events=store.events,
                    time=self.time,
                )
            )
        logger.info("Content deactivated: id=%d by=%s", content_id, caller)
        return result.content

    def get_content_details(self, content_id: int) -> ContentDetails:
        with self._operation("get_content_details") as store:
            result = _check(
                catalog.run_get(
                    catalog.GetContentInput(content_id=content_id),
                    repo=store.contents,
                    state_repo=store.platform_state,
                )
            )
        return result.details

    def list_contents(
        self,
        *,
        active_only: bool = False,
        creator: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> catalog.ContentListOutput:
        with self._operation("list_contents") as store:
            return catalog.run_list(
                catalog.ListContentInput(
                    active_only=active_only, creator=creator, limit=limit, offset=offset
                ),
                repo=store.contents,
            )

    # --- Access ---

    def access_content(self, caller: str, content_id: int) -> str:
        """Gate access and credit the creator. Returns the content locator."""
        with self._operation("access_content") as store:
            result = _check(
                access.run_access(
                    access.AccessContentInput(subscriber=caller, content_id=content_id),
                    subscriptions=store.subscriptions,
                    contents=store.contents,
                    state_repo=store.platform_state,
                    earnings=store.earnings,
                    events=store.events,
                    time=self.time,
                    config=self.access_config,
                )
            )
        logger.info(
            "Content accessed: id=%d subscriber=%s credit=%d",
            content_id,
            caller,
            result.creator_credit,
        )
        return result.locator

    # --- Earnings ---

    def withdraw_earnings(self, caller: str) -> int:
        with self._operation("withdraw_earnings") as store:
            result = _check(
                earnings.run_withdraw(
                    earnings.WithdrawInput(creator=caller),
                    repo=store.earnings,
                    transfer=self.transfer,
                    events=store.events,
                    time=self.time,
                )
            )
        logger.info("Earnings withdrawn: creator=%s amount=%d", caller, result.amount)
        return result.amount

    def get_earnings(self, identity: str) -> int:
        with self._operation("get_earnings") as store:
            return earnings.run_balance(earnings.BalanceInput(creator=identity), repo=store.earnings).balance

    # --- Creator registry ---

    def _set_creator_approval(self, caller: str, identity: str, approved: bool) -> None:
        with self._operation("set_creator_approval") as store:
            _check(
                registry.run_set_creator_approval(
                    registry.SetCreatorApprovalInput(caller=caller, identity=identity, approved=approved),
                    state_repo=store.platform_state,
                    approval_repo=store.approvals,
                    events=store.events,
                    time=self.time,
                )
            )
        logger.info("Creator approval changed: identity=%s approved=%s", identity, approved)

    def add_content_creator(self, caller: str, identity: str) -> None:
        self._set_creator_approval(caller, identity, True)

    def remove_content_creator(self, caller: str, identity: str) -> None:
        self._set_creator_approval(caller, identity, False)

    def is_approved_creator(self, identity: str) -> bool:
        with self._operation("is_approved_creator") as store:
            return registry.run_check_creator(
                registry.CheckCreatorInput(identity=identity), approval_repo=store.approvals
            ).approved

    def list_creators(self) -> list[str]:
        with self._operation("list_creators") as store:
            return registry.run_list_creators(approval_repo=store.approvals).creators

    # --- Platform control ---

    def update_subscription_price(self, caller: str, new_price: int) -> PlatformState:
        with self._operation("update_subscription_price") as store:
            result = _check(
                platform.run_set_price(
                    platform.SetPriceInput(caller=caller, new_price=new_price),
                    state_repo=store.platform_state,
                    events=store.events,
                    time=self.time,
                )
            )
        logger.info("Subscription unit price set to %d", new_price)
        return result.state

    def _set_paused(self, caller: str, paused: bool) -> PlatformState:
        with self._operation("set_paused") as store:
            result = _check(
                platform.run_set_paused(
                    platform.SetPausedInput(caller=caller, paused=paused),
                    state_repo=store.platform_state,
                    events=store.events,
                    time=self.time,
                )
            )
        logger.info("Platform paused=%s", paused)
        return result.state

    def pause_platform(self, caller: str) -> PlatformState:
        return self._set_paused(caller, True)

    def unpause_platform(self, caller: str) -> PlatformState:
        return self._set_paused(caller, False)

    def withdraw_platform_fees(self, caller: str) -> int:
        with self._operation("withdraw_platform_fees") as store:
            result = _check(
                platform.run_withdraw_fees(
                    platform.WithdrawFeesInput(caller=caller),
                    state_repo=store.platform_state,
                    transfer=self.transfer,
                    events=store.events,
                    time=self.time,
                )
            )
        logger.info("Platform fees withdrawn: amount=%d", result.amount)
        return result.amount

    def get_platform_state(self) -> platform.PlatformStateOutput:
        with self._operation("get_platform_state") as store:
            return platform.run_get_state(state_repo=store.platform_state, transfer=self.transfer)

    # --- Notifications ---

    def list_events(
        self,
        *,
        name: EventName | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> events.EventListOutput:
        with self._operation("list_events") as store:
            return events.run_list(
                events.ListEventsInput(name=name, limit=limit, offset=offset),
                repo=store.events,
            )


def create_service(
    store: SQLiteStore,
    rules: Rules,
    transfer: ValueTransferPort | None = None,
    time: TimePort | None = None,
) -> TierPassService:
    """Migrate the store, build the service and initialize platform state from rules."""
    store.migrate()
    service = TierPassService(store, transfer=transfer, time=time, rules=rules)
    service.initialize(rules.platform.administrator, rules.platform.initial_unit_price)
    return service
