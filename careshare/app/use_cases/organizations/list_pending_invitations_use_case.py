"""
List Pending Invitations Use Case
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.libs.result import Result, Return

from .dtos import ListPendingInvitationsResponse, PendingInvitation


class ListPendingInvitationsUseCase:
    """
    Lists the caller organization's invitations that are still acceptable
    (active, unused, unexpired). Callers without a profile or organization
    get an empty list.
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, user_id: Optional[UUID]) -> Result[ListPendingInvitationsResponse]:
        async with self.uow:
            if user_id is None:
                return Return.ok(ListPendingInvitationsResponse(invitations=[]))

            profile = await self.uow.profiles.get_by_user_id(user_id)
            if profile is None or profile.organization_id is None:
                return Return.ok(ListPendingInvitationsResponse(invitations=[]))

            invitations = await self.uow.invitations.list_live_by_organization(
                profile.organization_id, self.clock.now()
            )

            return Return.ok(
                ListPendingInvitationsResponse(
                    invitations=[
                        PendingInvitation(
                            id=str(invitation.id),
                            email=invitation.email,
                            role=invitation.role.value,
                            expires_at=invitation.expires_at.isoformat(),
                            created_at=invitation.created_at.isoformat(),
                        )
                        for invitation in invitations
                    ]
                )
            )
