"""
Cancel Invitation Use Case

Handles soft-cancelling invitations.
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, require_manager
from careshare.domain.entities import AuditEvent
from careshare.libs.result import Error, Result, Return

from .dtos import CancelInvitationResponse


class CancelInvitationUseCase:
    """
    Use case for cancelling invitations.

    Business Rules:
    - Only owner/admin can cancel
    - Invitation must belong to the caller's organization
    - Deactivates the invitation whatever its used/expired state; the
      record is kept
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: Optional[UUID], invitation_id: UUID
    ) -> Result[CancelInvitationResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            denied = require_manager(profile, "cancel invitations")
            if denied:
                return Return.err(denied)

            invitation = await self.uow.invitations.get_by_id(invitation_id)

            # Other organizations' invitations are reported as missing
            if invitation is None or invitation.organization_id != profile.organization_id:
                return Return.err(Error("NOT_FOUND", "Invitation not found"))

            invitation.is_active = False
            await self.uow.invitations.update(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=profile.organization_id,
                    user_id=profile.user_id,
                    action="invitation_cancelled",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "email": invitation.email,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(
                CancelInvitationResponse(invitation_id=str(invitation.id), status="cancelled")
            )
