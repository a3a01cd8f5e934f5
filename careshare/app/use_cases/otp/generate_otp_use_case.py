"""
Generate OTP Use Case

Issues a signup verification code and emails it.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.notification_dispatcher import (
    INotificationDispatcher,
    NotificationDispatchError,
    NotificationKind,
)
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, normalize_email
from careshare.domain.entities import OTPVerification, UserProfile
from careshare.domain.policy import OTP_POLICY
from careshare.domain.tokens import generate_otp_code
from careshare.libs.result import Error, Result, Return

from .dtos import IssueOTPResponse

logger = logging.getLogger(__name__)


class GenerateOTPUseCase:
    """
    Use case for issuing an OTP.

    Business Rules:
    - Only profiles with requires_otp_verification=True get codes;
      False and legacy (unset) profiles are exempt
    - Every unused OTP of the user is invalidated first
    - 6-digit code, expires in 10 minutes
    - Unlike other notifications, a failed email schedule deletes the new
      OTP and fails the request: a code nobody received is useless and
      must not count against the rate limit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotificationDispatcher,
        clock: Optional[IClock] = None,
    ):
        self.uow = uow
        self.notifier = notifier
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: Optional[UUID], email: Optional[str] = None
    ) -> Result[IssueOTPResponse]:
        """
        Execute generate OTP use case.

        Args:
            user_id: Authenticated user
            email: Address to send the code to (defaults to the profile email)

        Returns:
            Result with IssueOTPResponse DTO, or Error
        """
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            if not profile.requires_otp:
                return Return.err(
                    Error("OTP_NOT_REQUIRED", "OTP verification not required for this user")
                )

            now = self.clock.now()
            limited = await self._check_rate_limit(profile, now)
            if limited:
                return Return.err(limited)

            return await self._issue(profile, normalize_email(email or profile.email), now)

    async def _check_rate_limit(self, profile: UserProfile, now: datetime) -> Optional[Error]:
        """First issuance is not rate limited; resends are"""
        return None

    async def _issue(
        self, profile: UserProfile, email: str, now: datetime
    ) -> Result[IssueOTPResponse]:
        for previous in await self.uow.otp_verifications.list_unused(profile.user_id):
            previous.is_used = True
            await self.uow.otp_verifications.update(previous)

        otp = OTPVerification(
            user_id=profile.user_id,
            email=email,
            otp=generate_otp_code(),
            expires_at=OTP_POLICY.expires_at(now),
            created_at=now,
        )
        await self.uow.otp_verifications.create(otp)
        await self.uow.commit()

        try:
            await self.notifier.schedule(
                NotificationKind.OTP,
                {"user_email": email, "otp": otp.otp, "user_name": profile.first_name},
            )
        except NotificationDispatchError:
            logger.exception(f"Failed to schedule OTP email for user {profile.user_id}")
            await self.uow.otp_verifications.delete(otp)
            await self.uow.commit()
            return Return.err(
                Error("NOTIFICATION_FAILED", "Failed to send OTP email. Please try again.")
            )

        return Return.ok(
            IssueOTPResponse(status="sent", expires_at=otp.expires_at.isoformat())
        )
