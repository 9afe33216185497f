"""
Catalog component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tierpass.domain.entities import Content, ContentDetails
from tierpass.domain.errors import OperationError

# --- Input Models ---


@dataclass(frozen=True)
class CreateContentInput:
    """Input for publishing new content."""

    creator: str
    title: str
    locator: str
    required_tier: int


@dataclass(frozen=True)
class DeactivateContentInput:
    """Input for deactivating content (terminal)."""

    caller: str
    content_id: int


@dataclass(frozen=True)
class GetContentInput:
    """Input for reading content details."""

    content_id: int


@dataclass(frozen=True)
class ListContentInput:
    """Input for listing the catalog."""

    active_only: bool = False
    creator: str | None = None
    limit: int = 50
    offset: int = 0


# --- Output Models ---


@dataclass(frozen=True)
class ContentOperationOutput:
    """Output for create and deactivate."""

    content: Content | None = None
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ContentDetailsOutput:
    """Output containing public details of one content record."""

    details: ContentDetails | None = None
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ContentListOutput:
    """Output containing a page of public details."""

    items: list[ContentDetails]
    total: int
    limit: int
    offset: int
    errors: list[OperationError] = field(default_factory=list)
    success: bool = True
