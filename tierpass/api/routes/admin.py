"""
Administrator routes.

The administrator check itself lives in the components; these routes only
pass the caller identity through and map rejections to HTTP errors.
"""

from fastapi import APIRouter, Depends, Query

from tierpass.api.deps import get_current_principal, get_service
from tierpass.api.errors import http_error
from tierpass.api.schemas import (
    AmountResponse,
    CreatorResponse,
    EventListResponse,
    EventResponse,
    PlatformStateResponse,
    PriceUpdateRequest,
)
from tierpass.domain.entities import EventName, PlatformState
from tierpass.domain.errors import TierPassError
from tierpass.services.platform import TierPassService

router = APIRouter()


def _state_response(state: PlatformState, custody_balance: int) -> PlatformStateResponse:
    return PlatformStateResponse(
        administrator=state.administrator,
        unit_price=state.unit_price,
        content_counter=state.content_counter,
        paused=state.paused,
        custody_balance=custody_balance,
        updated_at=state.updated_at,
    )


@router.post("/creators/{identity}", response_model=CreatorResponse)
def add_creator(
    identity: str,
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> CreatorResponse:
    try:
        service.add_content_creator(caller, identity)
    except TierPassError as e:
        raise http_error(e) from e
    return CreatorResponse(identity=identity, approved=True)


@router.delete("/creators/{identity}", response_model=CreatorResponse)
def remove_creator(
    identity: str,
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> CreatorResponse:
    try:
        service.remove_content_creator(caller, identity)
    except TierPassError as e:
        raise http_error(e) from e
    return CreatorResponse(identity=identity, approved=False)


@router.put("/price", response_model=PlatformStateResponse)
def update_price(
    req: PriceUpdateRequest,
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> PlatformStateResponse:
    try:
        state = service.update_subscription_price(caller, req.new_price)
    except TierPassError as e:
        raise http_error(e) from e
    return _state_response(state, service.get_platform_state().custody_balance)


@router.post("/pause", response_model=PlatformStateResponse)
def pause(
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> PlatformStateResponse:
    try:
        state = service.pause_platform(caller)
    except TierPassError as e:
        raise http_error(e) from e
    return _state_response(state, service.get_platform_state().custody_balance)


@router.post("/unpause", response_model=PlatformStateResponse)
def unpause(
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> PlatformStateResponse:
    try:
        state = service.unpause_platform(caller)
    except TierPassError as e:
        raise http_error(e) from e
    return _state_response(state, service.get_platform_state().custody_balance)


@router.post("/fees/withdraw", response_model=AmountResponse)
def withdraw_fees(
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> AmountResponse:
    """Sweep the whole custody balance to the administrator."""
    try:
        amount = service.withdraw_platform_fees(caller)
    except TierPassError as e:
        raise http_error(e) from e
    return AmountResponse(amount=amount)


@router.get("/state", response_model=PlatformStateResponse)
def get_state(
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> PlatformStateResponse:
    snapshot = service.get_platform_state()
    return _state_response(snapshot.state, snapshot.custody_balance)


@router.get("/events", response_model=EventListResponse)
def list_events(
    name: EventName | None = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> EventListResponse:
    result = service.list_events(name=name, limit=limit, offset=offset)
    return EventListResponse(
        events=[
            EventResponse(
                seq=event.seq or 0,
                name=event.name,
                payload=event.payload,
                created_at=event.created_at,
            )
            for event in result.events
        ],
        total=result.total,
        limit=result.limit,
        offset=result.offset,
    )
