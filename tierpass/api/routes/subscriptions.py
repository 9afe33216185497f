from fastapi import APIRouter, Depends

from tierpass.api.deps import get_current_principal, get_service
from tierpass.api.errors import http_error
from tierpass.api.schemas import PurchaseRequest, SubscriptionStatusResponse
from tierpass.domain.errors import TierPassError
from tierpass.services.platform import TierPassService

router = APIRouter()


@router.post("", response_model=SubscriptionStatusResponse)
def purchase_subscription(
    req: PurchaseRequest,
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> SubscriptionStatusResponse:
    """Buy or renew the caller's subscription."""
    try:
        subscription = service.purchase_subscription(caller, req.tier, req.payment)
    except TierPassError as e:
        raise http_error(e) from e

    return SubscriptionStatusResponse(
        subscriber=subscription.subscriber,
        effective_active=True,
        expires_at=subscription.expires_at,
        tier=subscription.tier,
    )


@router.get("/{identity}", response_model=SubscriptionStatusResponse)
def get_subscription_status(
    identity: str,
    service: TierPassService = Depends(get_service),
) -> SubscriptionStatusResponse:
    status = service.get_subscription_status(identity)
    return SubscriptionStatusResponse(
        subscriber=identity,
        effective_active=status.effective_active,
        expires_at=status.expires_at,
        tier=status.tier,
    )
