"""
Platform component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tierpass.domain.entities import PlatformState
from tierpass.domain.errors import OperationError

# --- Input Models ---


@dataclass(frozen=True)
class InitializeInput:
    """Input for first-time platform initialization."""

    administrator: str
    unit_price: int


@dataclass(frozen=True)
class SetPriceInput:
    """Input for replacing the subscription unit price."""

    caller: str
    new_price: int


@dataclass(frozen=True)
class SetPausedInput:
    """Input for toggling the pause flag."""

    caller: str
    paused: bool


@dataclass(frozen=True)
class WithdrawFeesInput:
    """Input for sweeping custody to the administrator."""

    caller: str


# --- Output Models ---


@dataclass(frozen=True)
class PlatformOutput:
    """Output carrying the resulting platform state."""

    state: PlatformState | None = None
    created: bool = False
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class WithdrawFeesOutput:
    """Output for a fee sweep."""

    amount: int = 0
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class PlatformStateOutput:
    """Read-only snapshot of platform parameters and custody."""

    state: PlatformState
    custody_balance: int
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True
