from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from careshare.api.error import raise_for_error
from careshare.app.services.clock import IClock
from careshare.app.services.notification_dispatcher import INotificationDispatcher
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.profiles import (
    CreateProfileCommand,
    CreateProfileResponse,
    CreateProfileUseCase,
    LookupProfileResponse,
    LookupProfileUseCase,
    SendWelcomeEmailResponse,
    SendWelcomeEmailUseCase,
)
from careshare.depends import (
    get_clock,
    get_current_user_id,
    get_notification_dispatcher,
    get_unit_of_work,
)

router = APIRouter(prefix="/profiles", tags=["Profiles"])


class CreateProfileRequest(BaseModel):
    """
    Create profile HTTP request payload

    invite_token is the token from an invitation email; when it matches the
    email, the new profile joins that organization directly.
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    invite_token: Optional[str] = Field(None, description="Invitation token from signup link")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateProfileResponse,
)
async def create_profile(
    request: CreateProfileRequest,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """
    Create Profile

    Idempotent: a caller who already has a profile gets it back.

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED
        - 409 Conflict: ALREADY_EXISTS (email taken by another profile)
    """
    use_case = CreateProfileUseCase(uow, clock)
    result = await use_case.execute(
        user_id,
        CreateProfileCommand(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            invite_token=request.invite_token,
        ),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/lookup",
    status_code=status.HTTP_200_OK,
    response_model=LookupProfileResponse,
)
async def lookup_profile(
    email: str = Query(..., description="Email address to look up"),
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Look up a profile by email; profile is null when there is none"""
    use_case = LookupProfileUseCase(uow)
    result = await use_case.execute(user_id, email)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/welcome-email",
    status_code=status.HTTP_200_OK,
    response_model=SendWelcomeEmailResponse,
)
async def send_welcome_email(
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notification_dispatcher),
):
    """
    Send Welcome Email

    Called on the first dashboard visit; later calls report already_sent.

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED
        - 404 Not Found: NOT_FOUND (no profile yet)
    """
    use_case = SendWelcomeEmailUseCase(uow, notifier)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
