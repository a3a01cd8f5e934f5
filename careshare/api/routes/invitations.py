from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from careshare.api.error import raise_for_error
from careshare.app.services.clock import IClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.organizations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationResponse,
    CancelInvitationUseCase,
)
from careshare.depends import get_clock, get_current_user_id, get_unit_of_work

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class AcceptInvitationRequest(BaseModel):
    token: str = Field(..., description="Invitation token")


@router.post(
    "/accept",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    request: AcceptInvitationRequest,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """
    Accept Invitation

    Joins the caller to the inviting organization with the invited role.

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: EMAIL_MISMATCH
        - 404 Not Found: NOT_FOUND (unknown or cancelled token, no profile)
        - 409 Conflict: ALREADY_USED, INVARIANT_VIOLATION (already in an organization)
        - 410 Gone: EXPIRED
    """
    use_case = AcceptInvitationUseCase(uow, clock)
    result = await use_case.execute(user_id, request.token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=CancelInvitationResponse,
)
async def cancel_invitation(
    invitation_id: UUID,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cancel Invitation

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: NOT_FOUND
    """
    use_case = CancelInvitationUseCase(uow)
    result = await use_case.execute(user_id, invitation_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
