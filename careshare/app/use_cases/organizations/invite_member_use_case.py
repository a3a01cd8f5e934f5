"""
Invite Member Use Case

Handles inviting users to join an organization with a specified role.
"""

import logging
from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.notification_dispatcher import (
    INotificationDispatcher,
    NotificationKind,
)
from careshare.app.services.token_issuer import DEFAULT_MAX_ATTEMPTS, issue_unique_token
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import (
    load_caller_profile,
    normalize_email,
    require_manager,
    schedule_quietly,
)
from careshare.domain.entities import INVITABLE_ROLES, AuditEvent, MemberInvitation, MemberRole
from careshare.domain.policy import INVITATION_POLICY
from careshare.domain.tokens import generate_invite_token
from careshare.libs.result import Error, Result, Return

from .dtos import InviteMemberResponse

logger = logging.getLogger(__name__)


class InviteMemberUseCase:
    """
    Use case for inviting users to join an organization.

    Business Rules:
    - Only owner/admin can invite
    - Role must be admin, member or viewer
    - Cannot invite someone already in this organization
    - Cannot invite an email with a live invitation to this organization
    - Token XXXX-XXXX-XXXX-XXXX, unique, expires after 7 days
    - Email is scheduled after commit; a scheduling failure does not fail
      the invitation, the token is returned for manual hand-over
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotificationDispatcher,
        clock: Optional[IClock] = None,
        max_token_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.uow = uow
        self.notifier = notifier
        self.clock = clock or SystemClock()
        self.max_token_attempts = max_token_attempts

    async def execute(
        self, user_id: Optional[UUID], email: str, role: str
    ) -> Result[InviteMemberResponse]:
        """
        Execute invite member use case.

        Args:
            user_id: Authenticated user sending the invite
            email: Email address to invite
            role: Role to assign (admin/member/viewer)

        Returns:
            Result with InviteMemberResponse DTO, or Error
        """
        email = normalize_email(email)

        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            inviter = caller.value

            denied = require_manager(inviter, "invite members")
            if denied:
                return Return.err(denied)

            try:
                member_role = MemberRole(role)
            except ValueError:
                member_role = None
            if member_role not in INVITABLE_ROLES:
                return Return.err(
                    Error(
                        "INVALID_ROLE",
                        f"Invalid role: {role}. Must be one of: admin, member, viewer",
                    )
                )

            organization = await self.uow.organizations.get_by_id(inviter.organization_id)
            if organization is None:
                return Return.err(Error("NOT_FOUND", "Organization not found"))

            existing_member = await self.uow.profiles.get_by_email(email)
            if existing_member and existing_member.organization_id == organization.id:
                return Return.err(
                    Error(
                        "ALREADY_EXISTS",
                        "User is already a member of this organization",
                    )
                )

            now = self.clock.now()
            live_invitation = await self.uow.invitations.get_live_by_organization_and_email(
                organization.id, email, now
            )
            if live_invitation:
                return Return.err(
                    Error(
                        "ALREADY_EXISTS",
                        "An invitation has already been sent to this email",
                    )
                )

            async def token_taken(candidate: str) -> bool:
                return await self.uow.invitations.get_by_token(candidate) is not None

            token_result = await issue_unique_token(
                generate_invite_token, token_taken, self.max_token_attempts
            )
            if token_result.is_err():
                return Return.err(token_result.error)

            invitation = MemberInvitation(
                organization_id=organization.id,
                invited_by=inviter.id,
                email=email,
                role=member_role,
                token=token_result.value,
                expires_at=INVITATION_POLICY.expires_at(now),
                created_at=now,
            )
            await self.uow.invitations.create(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization.id,
                    user_id=inviter.user_id,
                    action="invite_sent",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "invited_email": email,
                        "role": member_role.value,
                    },
                )
            )

            await self.uow.commit()

            job_id = await schedule_quietly(
                self.notifier,
                NotificationKind.MEMBER_INVITATION,
                {
                    "invite_email": email,
                    "organization_name": organization.name,
                    "inviter_name": inviter.full_name,
                    "invite_token": invitation.token,
                },
            )
            if job_id is None:
                logger.warning(
                    f"Invitation {invitation.id} created without email, "
                    "token must be shared manually"
                )

            return Return.ok(
                InviteMemberResponse(
                    invitation_id=str(invitation.id),
                    invite_token=invitation.token,
                    expires_at=invitation.expires_at.isoformat(),
                    notification_scheduled=job_id is not None,
                )
            )
