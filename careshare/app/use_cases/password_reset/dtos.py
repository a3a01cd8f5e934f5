"""
Password Reset Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case (identical for unknown emails)"""

    status: str
    message: str


class VerifyResetTokenResponse(BaseModel):
    """Response for verify reset token use case"""

    valid: bool
    email: Optional[str] = None
    recently_used: bool = False
    error: Optional[str] = None


class CompletePasswordResetResponse(BaseModel):
    """Response for complete password reset use case"""

    status: str
    email: str
    message: str
