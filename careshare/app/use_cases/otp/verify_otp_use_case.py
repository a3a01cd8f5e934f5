"""
Verify OTP Use Case
"""

import secrets
from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.domain.entities import AuditEvent, OTPVerification
from careshare.domain.policy import OTP_POLICY
from careshare.libs.result import Error, Result, Return

from .dtos import VerifyOTPResponse


class VerifyOTPUseCase:
    """
    Use case for checking a submitted OTP.

    Business Rules:
    - Checks the user's newest unused, unverified OTP
    - Expired codes are marked used
    - 5 wrong codes burn the OTP: the 5th mismatch marks it used and
      fails with TOO_MANY_ATTEMPTS, so even a correct 6th try is refused
    - Attempt counter lives on the record and is committed on every miss
    - Success marks the OTP verified and used, and permanently clears the
      profile's requires_otp_verification flag
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, user_id: Optional[UUID], code: str) -> Result[VerifyOTPResponse]:
        if user_id is None:
            return Return.err(Error("UNAUTHENTICATED", "User must be authenticated"))

        async with self.uow:
            otp = await self.uow.otp_verifications.get_current(user_id)
            if otp is None:
                return Return.err(
                    Error("NOT_FOUND", "No valid OTP found. Please request a new one.")
                )

            now = self.clock.now()
            if otp.expires_at <= now:
                await self._burn(otp)
                return Return.err(
                    Error("EXPIRED", "OTP has expired. Please request a new one.")
                )

            if OTP_POLICY.attempts_exhausted(otp.attempts):
                await self._burn(otp)
                return Return.err(self._too_many_attempts())

            stored_code = otp.stored_code
            submitted = code.strip()
            if not stored_code or not secrets.compare_digest(stored_code, submitted):
                otp.attempts += 1
                if OTP_POLICY.attempts_exhausted(otp.attempts):
                    await self._burn(otp)
                    return Return.err(self._too_many_attempts())

                await self.uow.otp_verifications.update(otp)
                await self.uow.commit()
                remaining = OTP_POLICY.max_attempts - otp.attempts
                return Return.err(
                    Error(
                        "INVALID_CODE",
                        f"Invalid OTP code. {remaining} attempt(s) remaining.",
                    )
                )

            otp.is_verified = True
            otp.is_used = True
            otp.verified_at = now
            await self.uow.otp_verifications.update(otp)

            profile = await self.uow.profiles.get_by_user_id(user_id)
            if profile:
                profile.requires_otp_verification = False
                await self.uow.profiles.update(profile)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=profile.organization_id if profile else None,
                    user_id=user_id,
                    action="otp_verified",
                    event_metadata={"otp_id": str(otp.id), "attempts": otp.attempts},
                )
            )

            await self.uow.commit()

            return Return.ok(VerifyOTPResponse(status="verified"))

    async def _burn(self, otp: OTPVerification) -> None:
        otp.is_used = True
        await self.uow.otp_verifications.update(otp)
        await self.uow.commit()

    @staticmethod
    def _too_many_attempts() -> Error:
        return Error(
            "TOO_MANY_ATTEMPTS",
            "Too many failed attempts. Please request a new OTP.",
        )
