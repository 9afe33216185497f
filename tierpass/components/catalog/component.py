"""
Catalog component - content records and their lifecycle.

Lifecycle:
- create: approved creators only; IDs come from a pre-incremented counter,
  so they start at 1 and are never reused
- deactivate: creator or administrator; there is no way back to active

Details never expose the locator. The locator is handed out by the access
gate only.
"""

from __future__ import annotations

from tierpass.components.events import EventRepoPort, emit
from tierpass.components.registry import CreatorApprovalRepoPort, require_approved_creator
from tierpass.domain.entities import Content, ContentDetails, is_valid_tier
from tierpass.domain.errors import OperationError, invalid_argument, unauthorized

from .models import (
    ContentDetailsOutput,
    ContentListOutput,
    ContentOperationOutput,
    CreateContentInput,
    DeactivateContentInput,
    GetContentInput,
    ListContentInput,
)
from .ports import ContentRepoPort, PlatformStateRepoPort, TimePort

# --- Validation Functions ---


def validate_content_fields(
    title: str,
    locator: str,
    required_tier: int,
) -> OperationError | None:
    """Check fields in order: title, locator, tier."""
    if not title:
        return invalid_argument("empty_title", "Title is required", "title")
    if not locator:
        return invalid_argument("empty_locator", "Locator is required", "locator")
    if not is_valid_tier(required_tier):
        return invalid_argument("invalid_tier", "Required tier must be 1, 2 or 3", "required_tier")
    return None


def check_content_id(content_id: int, content_counter: int) -> OperationError | None:
    """IDs are valid in [1, content_counter]."""
    if content_id < 1 or content_id > content_counter:
        return invalid_argument("invalid_content_id", f"Unknown content id {content_id}", "content_id")
    return None


# --- Entry Points ---


def run_create(
    inp: CreateContentInput,
    *,
    repo: ContentRepoPort,
    state_repo: PlatformStateRepoPort,
    approval_repo: CreatorApprovalRepoPort,
    events: EventRepoPort,
    time: TimePort,
) -> ContentOperationOutput:
    """
    Publish a new content record.

    Args:
        inp: Creator, title, locator and required tier.
        repo: Content repository.
        state_repo: Platform state (content counter).
        approval_repo: Creator allow-list.
        events: Notification log.
        time: Time port.

    Returns:
        ContentOperationOutput with the new record or errors.
    """
    error = require_approved_creator(inp.creator, approval_repo)
    if error is None:
        error = validate_content_fields(inp.title, inp.locator, inp.required_tier)
    if error:
        return ContentOperationOutput(errors=[error], success=False)

    now = time.now_utc()
    state = state_repo.get()
    state.content_counter += 1
    state.updated_at = now
    state_repo.save(state)

    content = Content(
        id=state.content_counter,
        title=inp.title,
        locator=inp.locator,
        creator=inp.creator,
        required_tier=inp.required_tier,
        created_at=now,
        is_active=True,
    )
    repo.save(content)

    emit(
        events,
        "ContentCreated",
        {
            "content_id": content.id,
            "creator": content.creator,
            "title": content.title,
            "tier": content.required_tier,
        },
        now,
    )

    return ContentOperationOutput(content=content)


def run_deactivate(
    inp: DeactivateContentInput,
    *,
    repo: ContentRepoPort,
    state_repo: PlatformStateRepoPort,
    events: EventRepoPort,
    time: TimePort,
) -> ContentOperationOutput:
    """
    Deactivate content. Allowed for its creator and the administrator.

    Deactivating already inactive content succeeds and changes nothing.
    """
    state = state_repo.get()

    error = check_content_id(inp.content_id, state.content_counter)
    if error:
        return ContentOperationOutput(errors=[error], success=False)

    content = repo.get(inp.content_id)
    if content is None:
        return ContentOperationOutput(
            errors=[invalid_argument("invalid_content_id", f"Unknown content id {inp.content_id}")],
            success=False,
        )

    if inp.caller != content.creator and inp.caller != state.administrator:
        return ContentOperationOutput(
            errors=[unauthorized("not_authorized", "Only the creator or administrator can deactivate")],
            success=False,
        )

    if not content.is_active:
        return ContentOperationOutput(content=content)

    now = time.now_utc()
    content.is_active = False
    repo.save(content)

    emit(
        events,
        "ContentDeactivated",
        {"content_id": content.id, "by": inp.caller},
        now,
    )

    return ContentOperationOutput(content=content)


def run_get(
    inp: GetContentInput,
    *,
    repo: ContentRepoPort,
    state_repo: PlatformStateRepoPort,
) -> ContentDetailsOutput:
    """Read public details of one content record."""
    state = state_repo.get()

    error = check_content_id(inp.content_id, state.content_counter)
    content = repo.get(inp.content_id) if error is None else None
    if content is None:
        error = error or invalid_argument("invalid_content_id", f"Unknown content id {inp.content_id}")
        return ContentDetailsOutput(errors=[error], success=False)

    return ContentDetailsOutput(details=ContentDetails.from_content(content))


def run_list(inp: ListContentInput, *, repo: ContentRepoPort) -> ContentListOutput:
    """List public details, lowest ID first."""
    limit = max(1, min(inp.limit, 200))
    offset = max(0, inp.offset)
    items, total = repo.list(
        active_only=inp.active_only,
        creator=inp.creator,
        limit=limit,
        offset=offset,
    )
    return ContentListOutput(
        items=[ContentDetails.from_content(item) for item in items],
        total=total,
        limit=limit,
        offset=offset,
    )
