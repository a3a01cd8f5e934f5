"""
Remove Member Use Case

Detaches a member from an organization.
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, require_manager
from careshare.domain.entities import AuditEvent, MemberRole
from careshare.libs.result import Error, Result, Return

from .dtos import RemoveMemberResponse


class RemoveMemberUseCase:
    """
    Use case for removing members from an organization.

    Business Rules:
    - Only owner/admin can remove members
    - Target must belong to the caller's organization
    - The owner cannot be removed
    - The profile is kept; its organization and role are cleared so it can
      accept another invitation
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: Optional[UUID], member_id: UUID
    ) -> Result[RemoveMemberResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            denied = require_manager(profile, "remove members")
            if denied:
                return Return.err(denied)

            member = await self.uow.profiles.get_by_id(member_id)
            if member is None or member.organization_id != profile.organization_id:
                return Return.err(Error("NOT_FOUND", "Member not found in organization"))

            if member.role == MemberRole.owner:
                return Return.err(
                    Error("INVARIANT_VIOLATION", "Cannot remove organization owner")
                )

            organization_id = member.organization_id
            removed_role = member.role.value if member.role else None
            member.organization_id = None
            member.role = None
            await self.uow.profiles.update(member)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization_id,
                    user_id=profile.user_id,
                    action="member_removed",
                    event_metadata={
                        "member_id": str(member.id),
                        "removed_role": removed_role,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(RemoveMemberResponse(member_id=str(member.id), status="removed"))
