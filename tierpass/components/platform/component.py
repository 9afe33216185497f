"""
Platform component - administrator controls.

- Initialization fixes the administrator once; later calls keep it
- Unit price is replaced with no floor or ceiling; only a negative price
  is rejected (`invalid_price`)
- The pause flag is stored and reported but no operation consults it
- The fee sweep takes the whole custody balance, including creator earnings
  that have not been withdrawn yet; there is no separate fee ledger
"""

from __future__ import annotations

from tierpass.components.events import EventRepoPort, emit
from tierpass.components.registry import require_administrator
from tierpass.domain.entities import PlatformState
from tierpass.domain.errors import invalid_argument, precondition_failed

from .models import (
    InitializeInput,
    PlatformOutput,
    PlatformStateOutput,
    SetPausedInput,
    SetPriceInput,
    WithdrawFeesInput,
    WithdrawFeesOutput,
)
from .ports import CustodyPort, PlatformStateRepoPort, TimePort


def run_initialize(
    inp: InitializeInput,
    *,
    state_repo: PlatformStateRepoPort,
    time: TimePort,
) -> PlatformOutput:
    """
    Create the platform state if it does not exist yet.

    An existing state is returned untouched: the administrator never changes
    after the first initialization.
    """
    existing = state_repo.find()
    if existing is not None:
        return PlatformOutput(state=existing, created=False)

    if not inp.administrator:
        return PlatformOutput(
            errors=[invalid_argument("empty_identity", "Administrator is required", "administrator")],
            success=False,
        )
    if inp.unit_price < 0:
        return PlatformOutput(
            errors=[invalid_argument("invalid_price", "Price cannot be negative", "unit_price")],
            success=False,
        )

    state = PlatformState(
        administrator=inp.administrator,
        unit_price=inp.unit_price,
        content_counter=0,
        paused=False,
        updated_at=time.now_utc(),
    )
    state_repo.save(state)
    return PlatformOutput(state=state, created=True)


def run_set_price(
    inp: SetPriceInput,
    *,
    state_repo: PlatformStateRepoPort,
    events: EventRepoPort,
    time: TimePort,
) -> PlatformOutput:
    """Replace the subscription unit price (administrator only)."""
    state = state_repo.get()

    error = require_administrator(inp.caller, state)
    if error:
        return PlatformOutput(errors=[error], success=False)
    if inp.new_price < 0:
        return PlatformOutput(
            errors=[invalid_argument("invalid_price", "Price cannot be negative", "new_price")],
            success=False,
        )

    now = time.now_utc()
    previous = state.unit_price
    state.unit_price = inp.new_price
    state.updated_at = now
    state_repo.save(state)

    emit(
        events,
        "SubscriptionPriceUpdated",
        {"previous": previous, "unit_price": inp.new_price},
        now,
    )
    return PlatformOutput(state=state)


def run_set_paused(
    inp: SetPausedInput,
    *,
    state_repo: PlatformStateRepoPort,
    events: EventRepoPort,
    time: TimePort,
) -> PlatformOutput:
    """Set the pause flag (administrator only)."""
    state = state_repo.get()

    error = require_administrator(inp.caller, state)
    if error:
        return PlatformOutput(errors=[error], success=False)

    now = time.now_utc()
    state.paused = inp.paused
    state.updated_at = now
    state_repo.save(state)

    emit(events, "PlatformPauseChanged", {"paused": inp.paused}, now)
    return PlatformOutput(state=state)


def run_withdraw_fees(
    inp: WithdrawFeesInput,
    *,
    state_repo: PlatformStateRepoPort,
    transfer: CustodyPort,
    events: EventRepoPort,
    time: TimePort,
) -> WithdrawFeesOutput:
    """
    Sweep the entire custody balance to the administrator.

    Args:
        inp: The caller (must be the administrator).
        state_repo: Platform state.
        transfer: Custody balance and payout.
        events: Notification log.
        time: Time port.

    Returns:
        WithdrawFeesOutput with the amount swept or errors.
    """
    state = state_repo.get()

    error = require_administrator(inp.caller, state)
    if error:
        return WithdrawFeesOutput(errors=[error], success=False)

    amount = transfer.custody_balance()
    if amount <= 0:
        return WithdrawFeesOutput(
            errors=[precondition_failed("no_balance", "No balance to withdraw")],
            success=False,
        )

    transfer.pay_out(state.administrator, amount)
    emit(
        events,
        "PlatformFeesWithdrawn",
        {"administrator": state.administrator, "amount": amount},
        time.now_utc(),
    )
    return WithdrawFeesOutput(amount=amount)


def run_get_state(
    *,
    state_repo: PlatformStateRepoPort,
    transfer: CustodyPort,
) -> PlatformStateOutput:
    """Snapshot of platform parameters and custody balance."""
    return PlatformStateOutput(
        state=state_repo.get(),
        custody_balance=transfer.custody_balance(),
    )
