"""
Resend OTP Use Case
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from careshare.domain.entities import UserProfile
from careshare.domain.policy import OTP_POLICY
from careshare.libs.result import Error, Result

from .dtos import IssueOTPResponse
from .generate_otp_use_case import GenerateOTPUseCase


class ResendOTPUseCase(GenerateOTPUseCase):
    """
    Use case for requesting a fresh OTP.

    Business Rules:
    - At most 3 OTPs per user in any trailing 5 minutes
    - Otherwise identical to generating one, sent to the profile email
    """

    async def execute(self, user_id: Optional[UUID]) -> Result[IssueOTPResponse]:
        return await super().execute(user_id)

    async def _check_rate_limit(self, profile: UserProfile, now: datetime) -> Optional[Error]:
        recent = await self.uow.otp_verifications.count_created_since(
            profile.user_id, OTP_POLICY.issuance_window_start(now)
        )
        if OTP_POLICY.issuance_limit_reached(recent):
            return Error(
                "RATE_LIMITED",
                "Too many OTP requests. Please wait 5 minutes before requesting another one.",
            )
        return None
