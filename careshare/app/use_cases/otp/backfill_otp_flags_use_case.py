"""
Backfill OTP Flags Use Case

One-time migration: profiles created before OTP verification existed have
requires_otp_verification unset. They are exempt, so the flag is written
as False to make the field two-valued.
"""

import logging

from careshare.app.services.unit_of_work import UnitOfWork
from careshare.domain.entities import AuditEvent
from careshare.libs.result import Result, Return

from .dtos import BackfillOTPFlagsResponse

logger = logging.getLogger(__name__)


class BackfillOTPFlagsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[BackfillOTPFlagsResponse]:
        async with self.uow:
            legacy_profiles = await self.uow.profiles.list_without_otp_flag()
            logger.info(f"Found {len(legacy_profiles)} legacy profiles to migrate")

            for profile in legacy_profiles:
                profile.requires_otp_verification = False
                await self.uow.profiles.update(profile)

            await self.uow.audit_events.create(
                AuditEvent(
                    action="otp_flags_backfilled",
                    event_metadata={"migrated_count": len(legacy_profiles)},
                )
            )

            await self.uow.commit()

        logger.info(f"Migrated {len(legacy_profiles)} legacy profiles")
        return Return.ok(
            BackfillOTPFlagsResponse(status="success", migrated_count=len(legacy_profiles))
        )
