"""
Accept Invitation Use Case

Handles an authenticated user accepting an organization invitation.
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, normalize_email
from careshare.domain.entities import AuditEvent
from careshare.domain.policy import INVITATION_POLICY, TokenState
from careshare.libs.result import Error, Result, Return

from .dtos import AcceptInvitationResponse


class AcceptInvitationUseCase:
    """
    Use case for accepting organization invitations.

    Business Rules:
    - Unknown or cancelled tokens are rejected
    - Used tokens are rejected, then expired ones (before any email check)
    - Caller must not already belong to an organization
    - Invitation email must match the caller's profile email
    - Profile is updated before the invitation is marked used, both in
      the same unit of work
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: Optional[UUID], token: str
    ) -> Result[AcceptInvitationResponse]:
        """
        Execute accept invitation use case.

        Args:
            user_id: Authenticated user accepting the invite
            token: Invitation token

        Returns:
            Result with AcceptInvitationResponse DTO, or Error
        """
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            invitation = await self.uow.invitations.get_by_token(token.strip().upper())
            if invitation is None or not invitation.is_active:
                return Return.err(Error("NOT_FOUND", "Invalid invitation token"))

            now = self.clock.now()
            state = INVITATION_POLICY.evaluate(
                is_used=invitation.is_used,
                used_at=invitation.used_at,
                expires_at=invitation.expires_at,
                now=now,
            )
            if state == TokenState.used:
                return Return.err(
                    Error("ALREADY_USED", "Invitation has already been used")
                )
            if state == TokenState.expired:
                return Return.err(Error("EXPIRED", "Invitation has expired"))

            if profile.organization_id is not None:
                return Return.err(
                    Error(
                        "INVARIANT_VIOLATION",
                        "User already belongs to an organization",
                    )
                )

            if normalize_email(invitation.email) != normalize_email(profile.email):
                return Return.err(
                    Error(
                        "EMAIL_MISMATCH",
                        "Invitation email does not match user email",
                    )
                )

            profile.organization_id = invitation.organization_id
            profile.role = invitation.role
            profile.setup_completed = True
            await self.uow.profiles.update(profile)

            invitation.is_used = True
            invitation.used_by = profile.id
            invitation.used_at = now
            await self.uow.invitations.update(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=invitation.organization_id,
                    user_id=profile.user_id,
                    action="invitation_accepted",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "role": invitation.role.value,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(
                AcceptInvitationResponse(
                    organization_id=str(invitation.organization_id),
                    role=invitation.role.value,
                )
            )
