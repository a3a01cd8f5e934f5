from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from careshare.api.error import raise_for_error
from careshare.app.services.clock import IClock
from careshare.app.services.notification_dispatcher import INotificationDispatcher
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.password_reset import (
    CompletePasswordResetResponse,
    CompletePasswordResetUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    VerifyResetTokenResponse,
    VerifyResetTokenUseCase,
)
from careshare.depends import get_clock, get_notification_dispatcher, get_unit_of_work

router = APIRouter(prefix="/password-reset", tags=["Password Reset"])


class RequestPasswordResetRequest(BaseModel):
    email: EmailStr


class CompletePasswordResetRequest(BaseModel):
    token: str = Field(..., description="Password reset token")
    new_password: str = Field(..., description="New password (min 8 characters)")


@router.post(
    "/request",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notification_dispatcher),
    clock: IClock = Depends(get_clock),
):
    """
    Request Password Reset

    Always answers the same way so callers cannot tell whether the email
    has an account.
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        notifier,
        clock,
        max_token_attempts=ApplicationConfig.TOKEN_GENERATION_MAX_ATTEMPTS,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/verify",
    status_code=status.HTTP_200_OK,
    response_model=VerifyResetTokenResponse,
)
async def verify_reset_token(
    token: str = Query(..., description="Password reset token"),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """Check a reset token before showing the new-password form"""
    use_case = VerifyResetTokenUseCase(uow, clock)
    result = await use_case.execute(token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/complete",
    status_code=status.HTTP_200_OK,
    response_model=CompletePasswordResetResponse,
)
async def complete_password_reset(
    request: CompletePasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """
    Complete Password Reset

    Raises:
        - 400 Bad Request: INVALID_PASSWORD
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: ALREADY_USED (outside the grace window)
        - 410 Gone: EXPIRED
    """
    use_case = CompletePasswordResetUseCase(uow, clock)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
