from fastapi import APIRouter, Depends, Query

from tierpass.api.deps import get_current_principal, get_service
from tierpass.api.errors import http_error
from tierpass.api.schemas import (
    AccessResponse,
    ContentCreatedResponse,
    ContentCreateRequest,
    ContentListResponse,
)
from tierpass.domain.entities import ContentDetails
from tierpass.domain.errors import TierPassError
from tierpass.services.platform import TierPassService

router = APIRouter()


@router.get("", response_model=ContentListResponse)
def list_content(
    active_only: bool = False,
    creator: str | None = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: TierPassService = Depends(get_service),
) -> ContentListResponse:
    """List public content details, lowest ID first."""
    result = service.list_contents(
        active_only=active_only, creator=creator, limit=limit, offset=offset
    )
    return ContentListResponse(
        items=result.items, total=result.total, limit=result.limit, offset=result.offset
    )


@router.post("", response_model=ContentCreatedResponse, status_code=201)
def create_content(
    req: ContentCreateRequest,
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> ContentCreatedResponse:
    """Publish content as the calling (approved) creator."""
    try:
        content_id = service.create_content(caller, req.title, req.locator, req.required_tier)
    except TierPassError as e:
        raise http_error(e) from e
    return ContentCreatedResponse(content_id=content_id)


@router.get("/{content_id}", response_model=ContentDetails)
def get_content(
    content_id: int,
    service: TierPassService = Depends(get_service),
) -> ContentDetails:
    try:
        return service.get_content_details(content_id)
    except TierPassError as e:
        raise http_error(e) from e


@router.post("/{content_id}/access", response_model=AccessResponse)
def access_content(
    content_id: int,
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> AccessResponse:
    """Check entitlement and return the content locator."""
    try:
        locator = service.access_content(caller, content_id)
    except TierPassError as e:
        raise http_error(e) from e
    return AccessResponse(content_id=content_id, locator=locator)


@router.post("/{content_id}/deactivate", response_model=ContentDetails)
def deactivate_content(
    content_id: int,
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> ContentDetails:
    try:
        content = service.deactivate_content(caller, content_id)
    except TierPassError as e:
        raise http_error(e) from e
    return ContentDetails.from_content(content)
