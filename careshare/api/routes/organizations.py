from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from careshare.api.error import raise_for_error
from careshare.app.services.clock import IClock
from careshare.app.services.notification_dispatcher import INotificationDispatcher
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.organizations import (
    AcceptPartnershipResponse,
    AcceptPartnershipUseCase,
    ChangeMemberRoleResponse,
    ChangeMemberRoleUseCase,
    CreateOrganizationCommand,
    CreateOrganizationResponse,
    CreateOrganizationUseCase,
    CreatePartnershipResponse,
    CreatePartnershipUseCase,
    InviteMemberResponse,
    InviteMemberUseCase,
    ListMembersResponse,
    ListMembersUseCase,
    ListPendingInvitationsResponse,
    ListPendingInvitationsUseCase,
    RemoveMemberResponse,
    RemoveMemberUseCase,
)
from careshare.depends import (
    get_clock,
    get_current_user_id,
    get_notification_dispatcher,
    get_unit_of_work,
)

router = APIRouter(prefix="/organizations", tags=["Organizations"])


class CreateOrganizationRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., description="pharmacy, gp_clinic, hospital or aged_care")
    email: EmailStr
    phone_number: Optional[str] = Field(None, max_length=32)


class InviteMemberRequest(BaseModel):
    """
    Invite member HTTP request payload

    The invitee does not need an account yet.
    """

    email: EmailStr = Field(..., description="Email address of the invitee")
    role: str = Field("member", description="Role to assign: admin, member or viewer")


class ChangeMemberRoleRequest(BaseModel):
    role: str = Field(..., description="New role: admin, member or viewer")


class CreatePartnershipRequest(BaseModel):
    partnership_type: str = Field(..., description="Kind of partnership")
    notes: Optional[str] = Field(None, max_length=1000)


class AcceptPartnershipRequest(BaseModel):
    token: str = Field(..., description="Partnership token")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateOrganizationResponse,
)
async def create_organization(
    request: CreateOrganizationRequest,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Organization

    The caller becomes its owner.

    Raises:
        - 400 Bad Request: INVALID_ORGANIZATION_TYPE
        - 401 Unauthorized: UNAUTHENTICATED
        - 404 Not Found: NOT_FOUND (no profile yet)
        - 409 Conflict: INVARIANT_VIOLATION (already in an organization)
    """
    use_case = CreateOrganizationUseCase(uow)
    result = await use_case.execute(
        user_id,
        CreateOrganizationCommand(
            name=request.name,
            type=request.type,
            email=request.email,
            phone_number=request.phone_number,
        ),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/invitations",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteMemberResponse,
)
async def invite_member(
    request: InviteMemberRequest,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notification_dispatcher),
    clock: IClock = Depends(get_clock),
):
    """
    Invite Member

    Creates a 7-day invitation and schedules the invitation email. The
    token is returned either way so it can be shared manually when the
    email could not be scheduled.

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (not owner/admin)
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: ALREADY_EXISTS (live invitation for this email)
    """
    use_case = InviteMemberUseCase(
        uow,
        notifier,
        clock,
        max_token_attempts=ApplicationConfig.TOKEN_GENERATION_MAX_ATTEMPTS,
    )
    result = await use_case.execute(user_id, request.email, request.role)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/invitations",
    status_code=status.HTTP_200_OK,
    response_model=ListPendingInvitationsResponse,
)
async def list_pending_invitations(
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """List the caller organization's invitations that can still be accepted"""
    use_case = ListPendingInvitationsUseCase(uow, clock)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/members",
    status_code=status.HTTP_200_OK,
    response_model=ListMembersResponse,
)
async def list_members(
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the active members of the caller's organization"""
    use_case = ListMembersUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put(
    "/members/{member_id}",
    status_code=status.HTTP_200_OK,
    response_model=ChangeMemberRoleResponse,
)
async def change_member_role(
    member_id: UUID,
    request: ChangeMemberRoleRequest,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Member Role

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (not owner/admin)
        - 404 Not Found: NOT_FOUND (member not in the caller's organization)
        - 409 Conflict: INVARIANT_VIOLATION (target is the owner)
    """
    use_case = ChangeMemberRoleUseCase(uow)
    result = await use_case.execute(user_id, member_id, request.role)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/members/{member_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveMemberResponse,
)
async def remove_member(
    member_id: UUID,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member

    The profile stays; it leaves the organization and can accept a new
    invitation.

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: INVARIANT_VIOLATION (target is the owner)
    """
    use_case = RemoveMemberUseCase(uow)
    result = await use_case.execute(user_id, member_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/partnerships",
    status_code=status.HTTP_201_CREATED,
    response_model=CreatePartnershipResponse,
)
async def create_partnership(
    request: CreatePartnershipRequest,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """
    Create Partnership

    Raises:
        - 400 Bad Request: INVALID_PARTNERSHIP_TYPE
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
    """
    use_case = CreatePartnershipUseCase(
        uow, clock, max_token_attempts=ApplicationConfig.TOKEN_GENERATION_MAX_ATTEMPTS
    )
    result = await use_case.execute(user_id, request.partnership_type, request.notes)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


# Mounted without the /organizations prefix
partnerships_router = APIRouter(prefix="/partnerships", tags=["Organizations"])


@partnerships_router.post(
    "/accept",
    status_code=status.HTTP_200_OK,
    response_model=AcceptPartnershipResponse,
)
async def accept_partnership(
    request: AcceptPartnershipRequest,
    user_id: Optional[UUID] = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """
    Accept Partnership

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: ALREADY_USED, INVARIANT_VIOLATION (own partnership)
        - 410 Gone: EXPIRED
    """
    use_case = AcceptPartnershipUseCase(uow, clock)
    result = await use_case.execute(user_id, request.token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
