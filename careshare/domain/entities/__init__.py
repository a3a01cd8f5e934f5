"""
CareShare Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    INVITABLE_ROLES,
    MANAGER_ROLES,
    AccessGrantStatus,
    AccessPermission,
    MemberRole,
    OrganizationType,
    OTPStatus,
    PartnershipStatus,
    PartnershipType,
)

# Export all entities
from .user import User
from .user_profile import UserProfile
from .organization import Organization
from .patient import Patient
from .invitation import MemberInvitation
from .partnership import OrganizationPartnership
from .password_reset_token import PasswordResetToken
from .otp_verification import OTPVerification
from .access_grant import TokenAccessGrant
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "INVITABLE_ROLES",
    "MANAGER_ROLES",
    "AccessGrantStatus",
    "AccessPermission",
    "MemberRole",
    "OrganizationType",
    "OTPStatus",
    "PartnershipStatus",
    "PartnershipType",
    # Entities
    "User",
    "UserProfile",
    "Organization",
    "Patient",
    "MemberInvitation",
    "OrganizationPartnership",
    "PasswordResetToken",
    "OTPVerification",
    "TokenAccessGrant",
    "AuditEvent",
]
