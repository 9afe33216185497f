"""
Earnings component - per-creator accrued balances.

Withdrawal clears the ledger entry strictly before value leaves custody, so
a payout handler that calls back into withdrawal finds nothing left to take.
"""

from __future__ import annotations

from tierpass.components.events import EventRepoPort, emit
from tierpass.domain.errors import precondition_failed

from .models import BalanceInput, BalanceOutput, WithdrawInput, WithdrawOutput
from .ports import EarningsRepoPort, PayoutPort, TimePort


def run_withdraw(
    inp: WithdrawInput,
    *,
    repo: EarningsRepoPort,
    transfer: PayoutPort,
    events: EventRepoPort,
    time: TimePort,
) -> WithdrawOutput:
    """
    Withdraw the caller's full accrued balance.

    Args:
        inp: The withdrawing creator.
        repo: Earnings repository.
        transfer: Pays the amount out of custody.
        events: Notification log.
        time: Time port.

    Returns:
        WithdrawOutput with the amount paid or errors.
    """
    amount = repo.get_balance(inp.creator)
    if amount <= 0:
        return WithdrawOutput(
            errors=[precondition_failed("nothing_to_withdraw", "Nothing to withdraw")],
            success=False,
        )

    repo.clear(inp.creator)
    transfer.pay_out(inp.creator, amount)

    emit(
        events,
        "EarningsWithdrawn",
        {"creator": inp.creator, "amount": amount},
        time.now_utc(),
    )

    return WithdrawOutput(amount=amount)


def run_balance(inp: BalanceInput, *, repo: EarningsRepoPort) -> BalanceOutput:
    """Read a creator's accrued balance."""
    return BalanceOutput(creator=inp.creator, balance=repo.get_balance(inp.creator))
