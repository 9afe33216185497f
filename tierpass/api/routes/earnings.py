from fastapi import APIRouter, Depends

from tierpass.api.deps import get_current_principal, get_service
from tierpass.api.errors import http_error
from tierpass.api.schemas import AmountResponse, BalanceResponse
from tierpass.domain.errors import TierPassError
from tierpass.services.platform import TierPassService

router = APIRouter()


@router.post("/withdraw", response_model=AmountResponse)
def withdraw_earnings(
    caller: str = Depends(get_current_principal),
    service: TierPassService = Depends(get_service),
) -> AmountResponse:
    """Pay out the caller's full accrued balance."""
    try:
        amount = service.withdraw_earnings(caller)
    except TierPassError as e:
        raise http_error(e) from e
    return AmountResponse(amount=amount)


@router.get("/{identity}", response_model=BalanceResponse)
def get_earnings(
    identity: str,
    service: TierPassService = Depends(get_service),
) -> BalanceResponse:
    return BalanceResponse(identity=identity, balance=service.get_earnings(identity))
