"""
Create Profile Use Case

Creates the application profile of a freshly signed-up user, optionally
joining an organization through an invitation token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import normalize_email
from careshare.domain.entities import AuditEvent, MemberInvitation, UserProfile
from careshare.domain.policy import INVITATION_POLICY, TokenState
from careshare.libs.result import Error, Result, Return

from .dtos import CreateProfileCommand, CreateProfileResponse


class CreateProfileUseCase:
    """
    Use case for creating a profile after signup.

    Business Rules:
    - Idempotent: an existing profile is returned unchanged
    - A valid invite token (active, unused, unexpired, same email) places
      the user in the inviting organization with the invited role,
      marks setup complete and exempts them from OTP verification
    - Any other invite token is ignored and the user must verify by OTP
    - The consumed invitation is marked used and attributed to the profile
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: Optional[UUID], command: CreateProfileCommand
    ) -> Result[CreateProfileResponse]:
        if user_id is None:
            return Return.err(Error("UNAUTHENTICATED", "User must be authenticated"))

        email = normalize_email(command.email)

        async with self.uow:
            existing = await self.uow.profiles.get_by_user_id(user_id)
            if existing:
                return Return.ok(self._response(existing, already_existed=True))

            email_owner = await self.uow.profiles.get_by_email(email)
            if email_owner:
                return Return.err(
                    Error("ALREADY_EXISTS", "A profile already exists for this email")
                )

            now = self.clock.now()
            invitation = None
            if command.invite_token:
                invitation = await self._usable_invitation(command.invite_token, email, now)

            profile = UserProfile(
                user_id=user_id,
                first_name=command.first_name.strip(),
                last_name=command.last_name.strip(),
                email=email,
                organization_id=invitation.organization_id if invitation else None,
                role=invitation.role if invitation else None,
                setup_completed=invitation is not None,
                requires_otp_verification=invitation is None,
                created_at=now,
            )
            await self.uow.profiles.create(profile)

            if invitation:
                invitation.is_used = True
                invitation.used_by = profile.id
                invitation.used_at = now
                await self.uow.invitations.update(invitation)

                await self.uow.audit_events.create(
                    AuditEvent(
                        organization_id=invitation.organization_id,
                        user_id=user_id,
                        action="invitation_accepted",
                        event_metadata={
                            "invitation_id": str(invitation.id),
                            "role": invitation.role.value,
                            "on_signup": True,
                        },
                    )
                )

            await self.uow.commit()

            return Return.ok(self._response(profile))

    async def _usable_invitation(
        self, token: str, email: str, now: datetime
    ) -> Optional[MemberInvitation]:
        invitation = await self.uow.invitations.get_by_token(token.strip().upper())
        if invitation is None or not invitation.is_active:
            return None

        state = INVITATION_POLICY.evaluate(
            is_used=invitation.is_used,
            used_at=invitation.used_at,
            expires_at=invitation.expires_at,
            now=now,
        )
        if state != TokenState.valid:
            return None
        if normalize_email(invitation.email) != email:
            return None
        return invitation

    @staticmethod
    def _response(profile: UserProfile, already_existed: bool = False) -> CreateProfileResponse:
        return CreateProfileResponse(
            profile_id=str(profile.id),
            organization_id=str(profile.organization_id) if profile.organization_id else None,
            role=profile.role.value if profile.role else None,
            setup_completed=profile.setup_completed,
            requires_otp_verification=profile.requires_otp_verification,
            already_existed=already_existed,
        )
