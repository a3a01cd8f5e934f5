"""
Organization Use Case DTOs (Data Transfer Objects)

All Command and Response classes for organization membership,
invitations and partnerships.
"""

from typing import List, Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class CreateOrganizationCommand(BaseModel):
    """Command for creating an organization"""

    name: str
    type: str
    email: str
    phone_number: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class CreateOrganizationResponse(BaseModel):
    """Response for create organization use case"""

    organization_id: str
    role: str


class InviteMemberResponse(BaseModel):
    """
    Response for invite member use case.

    invite_token is always returned so the inviter can hand it over
    manually when the email could not be scheduled.
    """

    invitation_id: str
    invite_token: str
    expires_at: str
    notification_scheduled: bool


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    organization_id: str
    role: str


class CancelInvitationResponse(BaseModel):
    """Response for cancel invitation use case"""

    invitation_id: str
    status: str


class PendingInvitation(BaseModel):
    """Pending invitation as listed to organization managers"""

    id: str
    email: str
    role: str
    expires_at: str
    created_at: str


class ListPendingInvitationsResponse(BaseModel):
    """Response for list pending invitations use case"""

    invitations: List[PendingInvitation]


class CreatePartnershipResponse(BaseModel):
    """Response for create partnership use case"""

    partnership_id: str
    partnership_token: str
    expires_at: str


class AcceptPartnershipResponse(BaseModel):
    """Response for accept partnership use case"""

    partnership_id: str
    initiator_org_id: str
    partnership_type: str
    status: str


class OrganizationMember(BaseModel):
    """One active profile of an organization"""

    id: str
    first_name: str
    last_name: str
    email: str
    role: Optional[str] = None
    setup_completed: bool


class ListMembersResponse(BaseModel):
    members: List[OrganizationMember]


class ChangeMemberRoleResponse(BaseModel):
    """Response DTO after changing a member's role"""

    member_id: str
    old_role: Optional[str] = None
    new_role: str


class RemoveMemberResponse(BaseModel):
    """Response DTO after removing a member"""

    member_id: str
    status: str
