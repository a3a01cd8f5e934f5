"""
Check OTP Status Use Case
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.domain.entities import OTPStatus
from careshare.libs.result import Result, Return

from .dtos import OTPStatusResponse


class CheckOTPStatusUseCase:
    """
    Pure read classifying the caller, first match wins:

    1. a verified OTP record exists          -> verified
    2. no profile, or flag False/unset      -> legacy_exempt
    3. a used OTP from the legacy system    -> legacy_exempt
    4. a live pending OTP                    -> pending
    5. otherwise                             -> needs_new_code
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, user_id: Optional[UUID]) -> Result[OTPStatusResponse]:
        if user_id is None:
            return Return.ok(OTPStatusResponse(is_verified=False, needs_verification=False))

        async with self.uow:
            if await self.uow.otp_verifications.get_verified(user_id):
                return Return.ok(
                    OTPStatusResponse(
                        status=OTPStatus.verified.value,
                        is_verified=True,
                        needs_verification=False,
                    )
                )

            profile = await self.uow.profiles.get_by_user_id(user_id)
            if profile is None or not profile.requires_otp:
                return Return.ok(self._exempt())

            if await self.uow.otp_verifications.get_legacy_used(user_id):
                return Return.ok(self._exempt())

            pending = await self.uow.otp_verifications.get_current(user_id)
            if pending and pending.expires_at > self.clock.now():
                return Return.ok(
                    OTPStatusResponse(
                        status=OTPStatus.pending.value,
                        is_verified=False,
                        needs_verification=False,
                        has_active_pending_otp=True,
                    )
                )

            return Return.ok(
                OTPStatusResponse(
                    status=OTPStatus.needs_new_code.value,
                    is_verified=False,
                    needs_verification=True,
                )
            )

    @staticmethod
    def _exempt() -> OTPStatusResponse:
        return OTPStatusResponse(
            status=OTPStatus.legacy_exempt.value,
            is_verified=True,
            needs_verification=False,
            is_existing_user=True,
        )
