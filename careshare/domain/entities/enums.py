"""
CareShare Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class MemberRole(str, Enum):
    """User role within an organization"""

    owner = "owner"
    admin = "admin"
    member = "member"
    viewer = "viewer"


# Roles allowed to manage invitations, partnerships and patient sharing
MANAGER_ROLES = (MemberRole.owner, MemberRole.admin)

# Roles that can be handed out through an invitation
INVITABLE_ROLES = (MemberRole.admin, MemberRole.member, MemberRole.viewer)


class OrganizationType(str, Enum):
    """Kind of healthcare entity"""

    pharmacy = "pharmacy"
    gp_clinic = "gp_clinic"
    hospital = "hospital"
    aged_care = "aged_care"


class PartnershipType(str, Enum):
    """Purpose of an organization-to-organization partnership"""

    data_sharing = "data_sharing"
    referral_network = "referral_network"
    merger = "merger"


class PartnershipStatus(str, Enum):
    """Partnership status"""

    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    expired = "expired"


class AccessGrantStatus(str, Enum):
    """Cross-organization patient access grant status"""

    pending = "pending"
    approved = "approved"
    denied = "denied"
    revoked = "revoked"


class AccessPermission(str, Enum):
    """Permissions that can be granted on a shared patient"""

    view = "view"
    comment = "comment"
    view_medications = "view_medications"


class OTPStatus(str, Enum):
    """Classification of a user's OTP verification state"""

    verified = "verified"
    legacy_exempt = "legacy_exempt"
    pending = "pending"
    needs_new_code = "needs_new_code"
