"""
Create Partnership Use Case

Issues an organization-to-organization partnership token.
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.token_issuer import DEFAULT_MAX_ATTEMPTS, issue_unique_token
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, require_manager
from careshare.domain.entities import AuditEvent, OrganizationPartnership, PartnershipType
from careshare.domain.policy import PARTNERSHIP_POLICY
from careshare.domain.tokens import generate_partnership_token
from careshare.libs.result import Error, Result, Return

from .dtos import CreatePartnershipResponse


class CreatePartnershipUseCase:
    """
    Use case for creating partnerships.

    Business Rules:
    - Only owner/admin can create
    - Token XXXXX-XXXXX-XXXXX-XXXXX, unique, expires after 30 days
    - Starts pending
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Optional[IClock] = None,
        max_token_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.uow = uow
        self.clock = clock or SystemClock()
        self.max_token_attempts = max_token_attempts

    async def execute(
        self, user_id: Optional[UUID], partnership_type: str, notes: Optional[str] = None
    ) -> Result[CreatePartnershipResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            denied = require_manager(profile, "create partnerships")
            if denied:
                return Return.err(denied)

            try:
                kind = PartnershipType(partnership_type)
            except ValueError:
                return Return.err(
                    Error(
                        "INVALID_PARTNERSHIP_TYPE",
                        f"Invalid partnership type: {partnership_type}",
                    )
                )

            async def token_taken(candidate: str) -> bool:
                return await self.uow.partnerships.get_by_token(candidate) is not None

            token_result = await issue_unique_token(
                generate_partnership_token, token_taken, self.max_token_attempts
            )
            if token_result.is_err():
                return Return.err(token_result.error)

            now = self.clock.now()
            partnership = OrganizationPartnership(
                initiator_org_id=profile.organization_id,
                partnership_token=token_result.value,
                partnership_type=kind,
                initiated_by=profile.id,
                notes=notes,
                expires_at=PARTNERSHIP_POLICY.expires_at(now),
                created_at=now,
            )
            await self.uow.partnerships.create(partnership)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=profile.organization_id,
                    user_id=profile.user_id,
                    action="partnership_created",
                    event_metadata={
                        "partnership_id": str(partnership.id),
                        "partnership_type": kind.value,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(
                CreatePartnershipResponse(
                    partnership_id=str(partnership.id),
                    partnership_token=partnership.partnership_token,
                    expires_at=partnership.expires_at.isoformat(),
                )
            )
