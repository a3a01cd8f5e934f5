from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from careshare.api.error import raise_for_error
from careshare.app.services.clock import IClock
from careshare.app.services.notification_dispatcher import INotificationDispatcher
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.access_grants import (
    AccessGrantResponse,
    ApproveAccessCommand,
    ApproveAccessUseCase,
    CheckSharedAccessUseCase,
    DenyAccessUseCase,
    IssueShareTokenResponse,
    IssueShareTokenUseCase,
    ListAccessGrantsResponse,
    ListPatientGrantsUseCase,
    RequestAccessResponse,
    RequestAccessUseCase,
    RevokeAccessUseCase,
    SharedAccessResponse,
)
from careshare.depends import (
    get_clock,
    get_current_user_id,
    get_notification_dispatcher,
    get_unit_of_work,
)

router = APIRouter(prefix="/access-grants", tags=["Access Grants"])
patients_router = APIRouter(prefix="/patients", tags=["Access Grants"])


class RequestAccessRequest(BaseModel):
    share_token: str = Field(..., description="Patient share token, PAT-XXXX-XXXX-XXXX")


class ApproveAccessRequest(BaseModel):
    """
    Approve access HTTP request payload

    Either a positive expires_in_days or never_expires=true.
    """

    permissions: List[str] = Field(
        default_factory=lambda: ["view"],
        description="Subset of view, comment, view_medications",
    )
    expires_in_days: Optional[int] = Field(7, description="Days until the grant lapses")
    never_expires: bool = False


@patients_router.post(
    "/{patient_id}/share-token",
    status_code=status.HTTP_200_OK,
    response_model=IssueShareTokenResponse,
)
async def issue_share_token(
    patient_id: UUID,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Issue Share Token

    Replaces the patient's share token. Existing grants are unaffected.

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: NOT_FOUND
    """
    use_case = IssueShareTokenUseCase(
        uow, max_token_attempts=ApplicationConfig.TOKEN_GENERATION_MAX_ATTEMPTS
    )
    result = await use_case.execute(user_id, patient_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@patients_router.get(
    "/{patient_id}/access-grants",
    status_code=status.HTTP_200_OK,
    response_model=ListAccessGrantsResponse,
)
async def list_patient_grants(
    patient_id: UUID,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """List every grant for a patient with its expiry evaluated now"""
    use_case = ListPatientGrantsUseCase(uow, clock)
    result = await use_case.execute(user_id, patient_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/request",
    status_code=status.HTTP_200_OK,
    response_model=RequestAccessResponse,
)
async def request_access(
    request: RequestAccessRequest,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notification_dispatcher),
    clock: IClock = Depends(get_clock),
):
    """
    Request Access

    Succeeds with already_granted=true when the caller already has access.

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED
        - 404 Not Found: NOT_FOUND (unknown share token, no profile)
        - 409 Conflict: ALREADY_PENDING, INVARIANT_VIOLATION (own patient)
    """
    use_case = RequestAccessUseCase(uow, notifier, clock)
    result = await use_case.execute(user_id, request.share_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/shared/{share_token}",
    status_code=status.HTTP_200_OK,
    response_model=SharedAccessResponse,
)
async def check_shared_access(
    share_token: str,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """The caller's current permissions on a shared patient"""
    use_case = CheckSharedAccessUseCase(uow, clock)
    result = await use_case.execute(user_id, share_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{grant_id}/approve",
    status_code=status.HTTP_200_OK,
    response_model=AccessGrantResponse,
)
async def approve_access(
    grant_id: UUID,
    request: ApproveAccessRequest,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notification_dispatcher),
    clock: IClock = Depends(get_clock),
):
    """
    Approve Access

    Raises:
        - 400 Bad Request: INVALID_PERMISSIONS, INVALID_EXPIRY
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: INVARIANT_VIOLATION (grant not pending)
    """
    use_case = ApproveAccessUseCase(uow, notifier, clock)
    result = await use_case.execute(
        user_id,
        grant_id,
        ApproveAccessCommand(
            permissions=request.permissions,
            expires_in_days=request.expires_in_days,
            never_expires=request.never_expires,
        ),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{grant_id}/deny",
    status_code=status.HTTP_200_OK,
    response_model=AccessGrantResponse,
)
async def deny_access(
    grant_id: UUID,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """Deny a pending request (409 INVARIANT_VIOLATION otherwise)"""
    use_case = DenyAccessUseCase(uow, clock)
    result = await use_case.execute(user_id, grant_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{grant_id}/revoke",
    status_code=status.HTTP_200_OK,
    response_model=AccessGrantResponse,
)
async def revoke_access(
    grant_id: UUID,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """Revoke an approved grant (409 INVARIANT_VIOLATION otherwise)"""
    use_case = RevokeAccessUseCase(uow, clock)
    result = await use_case.execute(user_id, grant_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
