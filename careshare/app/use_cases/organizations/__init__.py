"""
Organization Use Cases

Organization creation, member invitations and partnerships.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .accept_partnership_use_case import AcceptPartnershipUseCase
from .cancel_invitation_use_case import CancelInvitationUseCase
from .change_member_role_use_case import ChangeMemberRoleUseCase
from .create_organization_use_case import CreateOrganizationUseCase
from .create_partnership_use_case import CreatePartnershipUseCase
from .dtos import (
    AcceptInvitationResponse,
    AcceptPartnershipResponse,
    CancelInvitationResponse,
    ChangeMemberRoleResponse,
    CreateOrganizationCommand,
    CreateOrganizationResponse,
    CreatePartnershipResponse,
    InviteMemberResponse,
    ListMembersResponse,
    ListPendingInvitationsResponse,
    OrganizationMember,
    PendingInvitation,
    RemoveMemberResponse,
)
from .invite_member_use_case import InviteMemberUseCase
from .list_members_use_case import ListMembersUseCase
from .list_pending_invitations_use_case import ListPendingInvitationsUseCase
from .remove_member_use_case import RemoveMemberUseCase

__all__ = [
    # Use Cases
    "CreateOrganizationUseCase",
    "InviteMemberUseCase",
    "AcceptInvitationUseCase",
    "CancelInvitationUseCase",
    "ListPendingInvitationsUseCase",
    "ListMembersUseCase",
    "ChangeMemberRoleUseCase",
    "RemoveMemberUseCase",
    "CreatePartnershipUseCase",
    "AcceptPartnershipUseCase",
    # DTOs - Commands
    "CreateOrganizationCommand",
    # DTOs - Responses
    "CreateOrganizationResponse",
    "InviteMemberResponse",
    "AcceptInvitationResponse",
    "CancelInvitationResponse",
    "ListPendingInvitationsResponse",
    "CreatePartnershipResponse",
    "AcceptPartnershipResponse",
    "ListMembersResponse",
    "ChangeMemberRoleResponse",
    "RemoveMemberResponse",
    # DTOs - Nested Models
    "PendingInvitation",
    "OrganizationMember",
]
