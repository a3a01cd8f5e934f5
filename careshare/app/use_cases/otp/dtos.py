"""
OTP Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel


class IssueOTPResponse(BaseModel):
    """Response for generate and resend OTP use cases"""

    status: str
    expires_at: str


class VerifyOTPResponse(BaseModel):
    """Response for verify OTP use case"""

    status: str


class OTPStatusResponse(BaseModel):
    """Response for OTP status check"""

    status: Optional[str] = None
    is_verified: bool
    needs_verification: bool
    is_existing_user: bool = False
    has_active_pending_otp: bool = False


class BackfillOTPFlagsResponse(BaseModel):
    """Response for the legacy OTP flag backfill"""

    status: str
    migrated_count: int
