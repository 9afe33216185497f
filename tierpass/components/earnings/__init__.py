"""
Earnings component - accrued creator balances and withdrawal.
"""

from .component import run_balance, run_withdraw
from .models import BalanceInput, BalanceOutput, WithdrawInput, WithdrawOutput
from .ports import EarningsRepoPort, PayoutPort, TimePort

__all__ = [
    # Entry points
    "run_balance",
    "run_withdraw",
    # Models
    "BalanceInput",
    "BalanceOutput",
    "WithdrawInput",
    "WithdrawOutput",
    # Ports
    "EarningsRepoPort",
    "PayoutPort",
    "TimePort",
]
