"""
Accept Partnership Use Case
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, require_manager
from careshare.domain.entities import AuditEvent, PartnershipStatus
from careshare.domain.policy import PARTNERSHIP_POLICY, TokenState
from careshare.libs.result import Error, Result, Return

from .dtos import AcceptPartnershipResponse


class AcceptPartnershipUseCase:
    """
    Use case for accepting a partnership token on behalf of another
    organization.

    Business Rules:
    - Only owner/admin of the accepting organization
    - Token must be pending and unexpired; an expired one is stored as expired
    - An organization cannot partner with itself
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: Optional[UUID], token: str
    ) -> Result[AcceptPartnershipResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            denied = require_manager(profile, "accept partnerships")
            if denied:
                return Return.err(denied)

            partnership = await self.uow.partnerships.get_by_token(token.strip().upper())
            if partnership is None or not partnership.is_active:
                return Return.err(Error("NOT_FOUND", "Invalid partnership token"))

            now = self.clock.now()
            state = PARTNERSHIP_POLICY.evaluate(
                is_used=partnership.status != PartnershipStatus.pending,
                expires_at=partnership.expires_at,
                now=now,
            )
            if state == TokenState.used:
                return Return.err(
                    Error(
                        "ALREADY_USED",
                        f"Partnership is already {partnership.status.value}",
                    )
                )
            if state == TokenState.expired:
                partnership.status = PartnershipStatus.expired
                await self.uow.partnerships.update(partnership)
                await self.uow.commit()
                return Return.err(Error("EXPIRED", "Partnership token has expired"))

            if partnership.initiator_org_id == profile.organization_id:
                return Return.err(
                    Error(
                        "INVARIANT_VIOLATION",
                        "An organization cannot accept its own partnership",
                    )
                )

            partnership.status = PartnershipStatus.accepted
            partnership.partner_org_id = profile.organization_id
            partnership.accepted_by = profile.id
            partnership.accepted_at = now
            await self.uow.partnerships.update(partnership)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=profile.organization_id,
                    user_id=profile.user_id,
                    action="partnership_accepted",
                    event_metadata={
                        "partnership_id": str(partnership.id),
                        "initiator_org_id": str(partnership.initiator_org_id),
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(
                AcceptPartnershipResponse(
                    partnership_id=str(partnership.id),
                    initiator_org_id=str(partnership.initiator_org_id),
                    partnership_type=partnership.partnership_type.value,
                    status=partnership.status.value,
                )
            )
