"""
Access Grant Use Case DTOs (Data Transfer Objects)

All Command and Response classes for cross-organization patient sharing.
"""

from typing import List, Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class ApproveAccessCommand(BaseModel):
    """Command for approving a pending access request"""

    permissions: List[str]
    expires_in_days: Optional[int] = None
    never_expires: bool = False


# ============================================================================
# Response DTOs
# ============================================================================


class IssueShareTokenResponse(BaseModel):
    """Response for issue share token use case"""

    patient_id: str
    share_token: str


class RequestAccessResponse(BaseModel):
    """
    Response for request access use case.

    already_granted is True when the caller already holds an approved,
    unexpired grant; no new request is created in that case.
    """

    grant_id: str
    status: str
    already_granted: bool = False


class AccessGrantResponse(BaseModel):
    """Response for approve, deny and revoke use cases"""

    grant_id: str
    status: str
    permissions: List[str]
    expires_at: Optional[str] = None


class AccessGrantView(BaseModel):
    """Grant as listed to the owning organization, with expiry computed at read time"""

    id: str
    patient_id: str
    requested_by_user_id: str
    requested_by_org_id: Optional[str] = None
    status: str
    effective_status: str
    is_expired: bool
    permissions: List[str]
    expires_at: Optional[str] = None
    requested_at: str
    granted_at: Optional[str] = None
    denied_at: Optional[str] = None
    revoked_at: Optional[str] = None


class ListAccessGrantsResponse(BaseModel):
    """Response for list patient access grants use case"""

    grants: List[AccessGrantView]


class SharedAccessResponse(BaseModel):
    """Caller's effective access to a shared patient"""

    grant_id: str
    patient_id: str
    patient_name: str
    permissions: List[str]
    expires_at: Optional[str] = None
