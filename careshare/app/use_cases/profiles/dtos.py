"""
Profile Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel


class CreateProfileCommand(BaseModel):
    """Command for creating the caller's profile after signup"""

    first_name: str
    last_name: str
    email: str
    invite_token: Optional[str] = None


class CreateProfileResponse(BaseModel):
    """Response for create profile use case"""

    profile_id: str
    organization_id: Optional[str] = None
    role: Optional[str] = None
    setup_completed: bool
    requires_otp_verification: Optional[bool] = None
    already_existed: bool = False


class ProfileSummary(BaseModel):
    """Public view of a profile, used when choosing who to share with"""

    id: str
    first_name: str
    last_name: str
    email: str
    organization_name: str
    organization_type: str


class LookupProfileResponse(BaseModel):
    """Response for lookup by email; profile is None when nothing matches"""

    profile: Optional[ProfileSummary] = None


class SendWelcomeEmailResponse(BaseModel):
    """
    Response DTO for the first-visit welcome email

    sent is False when it was already sent or could not be scheduled; in
    the latter case the next visit tries again.
    """

    sent: bool
    already_sent: bool = False
