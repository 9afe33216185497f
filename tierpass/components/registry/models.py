"""
Registry component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tierpass.domain.errors import OperationError


@dataclass(frozen=True)
class SetCreatorApprovalInput:
    """Input for approving or revoking a content creator."""

    caller: str
    identity: str
    approved: bool


@dataclass(frozen=True)
class CheckCreatorInput:
    """Input for an approval lookup."""

    identity: str


# --- Output Models ---


@dataclass(frozen=True)
class RegistryOutput:
    """Output for approval changes."""

    identity: str | None = None
    approved: bool = False
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class CreatorStatusOutput:
    """Output for an approval lookup."""

    identity: str
    approved: bool
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class CreatorListOutput:
    """Output listing currently approved creators."""

    creators: list[str]
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True
