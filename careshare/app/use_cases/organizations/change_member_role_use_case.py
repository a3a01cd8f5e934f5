"""
Change Member Role Use Case

Handles changing a member's role within an organization.
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, require_manager
from careshare.domain.entities import INVITABLE_ROLES, AuditEvent, MemberRole
from careshare.libs.result import Error, Result, Return

from .dtos import ChangeMemberRoleResponse


class ChangeMemberRoleUseCase:
    """
    Use case for changing a member's role.

    Business Rules:
    - Only owner/admin can change roles
    - New role must be admin, member or viewer; ownership is not transferable
    - Target must belong to the caller's organization
    - The owner's role cannot be changed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: Optional[UUID], member_id: UUID, new_role: str
    ) -> Result[ChangeMemberRoleResponse]:
        """
        Execute change member role use case.

        Args:
            user_id: Authenticated user making the change
            member_id: Profile id of the member
            new_role: Role to assign (admin/member/viewer)

        Returns:
            Result with ChangeMemberRoleResponse DTO, or Error
        """
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            denied = require_manager(profile, "update member roles")
            if denied:
                return Return.err(denied)

            try:
                role = MemberRole(new_role)
            except ValueError:
                role = None
            if role not in INVITABLE_ROLES:
                return Return.err(
                    Error(
                        "INVALID_ROLE",
                        f"Invalid role: {new_role}. Must be one of: admin, member, viewer",
                    )
                )

            member = await self.uow.profiles.get_by_id(member_id)
            if member is None or member.organization_id != profile.organization_id:
                return Return.err(Error("NOT_FOUND", "Member not found in organization"))

            if member.role == MemberRole.owner:
                return Return.err(Error("INVARIANT_VIOLATION", "Cannot change owner role"))

            old_role = member.role.value if member.role else None
            member.role = role
            await self.uow.profiles.update(member)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=profile.organization_id,
                    user_id=profile.user_id,
                    action="role_changed",
                    event_metadata={
                        "member_id": str(member.id),
                        "old_role": old_role,
                        "new_role": role.value,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(
                ChangeMemberRoleResponse(
                    member_id=str(member.id), old_role=old_role, new_role=role.value
                )
            )
