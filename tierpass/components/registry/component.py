"""
Registry component - administrator identity and creator allow-list.

The administrator is fixed when the platform state is first initialized.
Creator approval is a free toggle: revoking it does not touch content the
creator already published.
"""

from __future__ import annotations

from tierpass.components.events import EventRepoPort, emit
from tierpass.domain.entities import PlatformState
from tierpass.domain.errors import OperationError, invalid_argument, unauthorized

from .models import (
    CheckCreatorInput,
    CreatorListOutput,
    CreatorStatusOutput,
    RegistryOutput,
    SetCreatorApprovalInput,
)
from .ports import CreatorApprovalRepoPort, PlatformStateRepoPort, TimePort

# --- Guards ---


def require_administrator(caller: str, state: PlatformState) -> OperationError | None:
    """Reject unless caller is the platform administrator."""
    if caller != state.administrator:
        return unauthorized("not_administrator", "Only the administrator can do this")
    return None


def require_approved_creator(
    caller: str,
    approvals: CreatorApprovalRepoPort,
) -> OperationError | None:
    """Reject unless caller is on the creator allow-list."""
    if not approvals.is_approved(caller):
        return unauthorized("not_approved_creator", "Caller is not an approved creator")
    return None


# --- Entry Points ---


def run_set_creator_approval(
    inp: SetCreatorApprovalInput,
    *,
    state_repo: PlatformStateRepoPort,
    approval_repo: CreatorApprovalRepoPort,
    events: EventRepoPort,
    time: TimePort,
) -> RegistryOutput:
    """
    Approve or revoke a creator (administrator only, idempotent).

    Args:
        inp: Caller, target identity and the desired flag.
        state_repo: Platform state repository.
        approval_repo: Creator approval repository.
        events: Notification log.
        time: Time port.

    Returns:
        RegistryOutput with the resulting flag or errors.
    """
    state = state_repo.get()

    error = require_administrator(inp.caller, state)
    if error:
        return RegistryOutput(errors=[error], success=False)

    if not inp.identity or not inp.identity.strip():
        return RegistryOutput(
            errors=[invalid_argument("empty_identity", "Identity is required", "identity")],
            success=False,
        )

    now = time.now_utc()
    approval_repo.set_approved(inp.identity, inp.approved, now)
    emit(
        events,
        "CreatorApprovalChanged",
        {"creator": inp.identity, "approved": inp.approved},
        now,
    )

    return RegistryOutput(identity=inp.identity, approved=inp.approved)


def run_check_creator(
    inp: CheckCreatorInput,
    *,
    approval_repo: CreatorApprovalRepoPort,
) -> CreatorStatusOutput:
    """Look up whether identity is an approved creator."""
    return CreatorStatusOutput(
        identity=inp.identity,
        approved=approval_repo.is_approved(inp.identity),
    )


def run_list_creators(*, approval_repo: CreatorApprovalRepoPort) -> CreatorListOutput:
    """List approved creators."""
    return CreatorListOutput(creators=approval_repo.list_approved())
