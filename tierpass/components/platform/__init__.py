"""
Platform component - price, pause flag, fee sweep and initialization.
"""

from .component import (
    run_get_state,
    run_initialize,
    run_set_paused,
    run_set_price,
    run_withdraw_fees,
)
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

__all__ = [
    # Entry points
    "run_get_state",
    "run_initialize",
    "run_set_paused",
    "run_set_price",
    "run_withdraw_fees",
    # Models
    "InitializeInput",
    "PlatformOutput",
    "PlatformStateOutput",
    "SetPausedInput",
    "SetPriceInput",
    "WithdrawFeesInput",
    "WithdrawFeesOutput",
    # Ports
    "CustodyPort",
    "PlatformStateRepoPort",
    "TimePort",
]
