"""
Earnings component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tierpass.domain.errors import OperationError


@dataclass(frozen=True)
class WithdrawInput:
    """Input for withdrawing accrued earnings."""

    creator: str


@dataclass(frozen=True)
class BalanceInput:
    """Input for reading an accrued balance."""

    creator: str


@dataclass(frozen=True)
class WithdrawOutput:
    """Output for a withdrawal."""

    amount: int = 0
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class BalanceOutput:
    """Output for a balance lookup."""

    creator: str
    balance: int
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True
