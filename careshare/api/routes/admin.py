"""
Admin API Routes - maintenance endpoints

Authentication is via Admin API Key, not user JWTs.
"""

from fastapi import APIRouter, Depends, status

from careshare.api.error import raise_for_error
from careshare.api.utils.admin_auth import verify_admin_api_key
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.otp import BackfillOTPFlagsResponse, BackfillOTPFlagsUseCase
from careshare.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/otp/backfill",
    status_code=status.HTTP_200_OK,
    response_model=BackfillOTPFlagsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def backfill_otp_flags(
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Backfill OTP Flags

    Marks every profile created before email verification existed as not
    requiring it.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
    """
    use_case = BackfillOTPFlagsUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise_for_error(result.error)

    return result.value
