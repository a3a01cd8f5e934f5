"""
List Organization Members Use Case
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.unit_of_work import UnitOfWork
from careshare.libs.result import Result, Return

from .dtos import ListMembersResponse, OrganizationMember


class ListMembersUseCase:
    """
    Lists the active profiles of the caller's organization. Callers without
    a profile or organization get an empty list.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: Optional[UUID]) -> Result[ListMembersResponse]:
        async with self.uow:
            if user_id is None:
                return Return.ok(ListMembersResponse(members=[]))

            profile = await self.uow.profiles.get_by_user_id(user_id)
            if profile is None or profile.organization_id is None:
                return Return.ok(ListMembersResponse(members=[]))

            members = await self.uow.profiles.list_active_by_organization(
                profile.organization_id
            )

            return Return.ok(
                ListMembersResponse(
                    members=[
                        OrganizationMember(
                            id=str(member.id),
                            first_name=member.first_name,
                            last_name=member.last_name,
                            email=member.email,
                            role=member.role.value if member.role else None,
                            setup_completed=member.setup_completed,
                        )
                        for member in members
                    ]
                )
            )
