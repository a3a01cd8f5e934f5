from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from careshare.api.error import raise_for_error
from careshare.app.services.clock import IClock
from careshare.app.services.notification_dispatcher import INotificationDispatcher
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.otp import (
    CheckOTPStatusUseCase,
    GenerateOTPUseCase,
    IssueOTPResponse,
    OTPStatusResponse,
    ResendOTPUseCase,
    VerifyOTPResponse,
    VerifyOTPUseCase,
)
from careshare.depends import (
    get_clock,
    get_current_user_id,
    get_notification_dispatcher,
    get_unit_of_work,
)

router = APIRouter(prefix="/otp", tags=["OTP"])


class GenerateOTPRequest(BaseModel):
    email: Optional[EmailStr] = Field(None, description="Defaults to the profile email")


class VerifyOTPRequest(BaseModel):
    code: str = Field(..., description="6-digit code from the email")


@router.post(
    "/generate",
    status_code=status.HTTP_200_OK,
    response_model=IssueOTPResponse,
)
async def generate_otp(
    request: Optional[GenerateOTPRequest] = None,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notification_dispatcher),
    clock: IClock = Depends(get_clock),
):
    """
    Generate OTP

    Replaces any outstanding code. The code is only useful if it can be
    delivered, so a scheduling failure undoes it.

    Raises:
        - 400 Bad Request: OTP_NOT_REQUIRED
        - 401 Unauthorized: UNAUTHENTICATED
        - 404 Not Found: NOT_FOUND
        - 503 Service Unavailable: NOTIFICATION_FAILED
    """
    use_case = GenerateOTPUseCase(uow, notifier, clock)
    result = await use_case.execute(user_id, request.email if request else None)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/resend",
    status_code=status.HTTP_200_OK,
    response_model=IssueOTPResponse,
)
async def resend_otp(
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notification_dispatcher),
    clock: IClock = Depends(get_clock),
):
    """
    Resend OTP

    Raises:
        - 429 Too Many Requests: RATE_LIMITED (3 codes per 5 minutes)
        - plus everything /otp/generate raises
    """
    use_case = ResendOTPUseCase(uow, notifier, clock)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/verify",
    status_code=status.HTTP_200_OK,
    response_model=VerifyOTPResponse,
)
async def verify_otp(
    request: VerifyOTPRequest,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """
    Verify OTP

    Raises:
        - 400 Bad Request: INVALID_CODE
        - 401 Unauthorized: UNAUTHENTICATED
        - 404 Not Found: NOT_FOUND (no outstanding code)
        - 410 Gone: EXPIRED
        - 429 Too Many Requests: TOO_MANY_ATTEMPTS
    """
    use_case = VerifyOTPUseCase(uow, clock)
    result = await use_case.execute(user_id, request.code)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/status",
    status_code=status.HTTP_200_OK,
    response_model=OTPStatusResponse,
)
async def otp_status(
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """Where the caller stands in email verification"""
    use_case = CheckOTPStatusUseCase(uow, clock)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
