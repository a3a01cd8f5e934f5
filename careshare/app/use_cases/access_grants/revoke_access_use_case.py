"""
Revoke Access Use Case
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile
from careshare.domain.entities import AccessGrantStatus, AuditEvent
from careshare.libs.result import Error, Result, Return

from .authorization import load_managed_grant
from .dtos import AccessGrantResponse


class RevokeAccessUseCase:
    """
    Use case for revoking an approved grant.

    Business Rules:
    - Only approved grants can be revoked; pending, denied and revoked
      grants are rejected
    - Revocation is terminal and records who revoked and when
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: Optional[UUID], grant_id: UUID
    ) -> Result[AccessGrantResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            managed = await load_managed_grant(
                self.uow, profile, grant_id, "revoke access"
            )
            if managed.is_err():
                return Return.err(managed.error)
            grant, patient = managed.value

            if grant.status != AccessGrantStatus.approved:
                return Return.err(
                    Error(
                        "INVARIANT_VIOLATION",
                        f"Cannot revoke a {grant.status.value} access grant",
                    )
                )

            grant.status = AccessGrantStatus.revoked
            grant.is_active = False
            grant.revoked_at = self.clock.now()
            grant.revoked_by_user_id = profile.user_id
            await self.uow.access_grants.update(grant)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=patient.organization_id,
                    user_id=profile.user_id,
                    action="access_revoked",
                    event_metadata={"grant_id": str(grant.id), "patient_id": str(patient.id)},
                )
            )

            await self.uow.commit()

            return Return.ok(
                AccessGrantResponse(
                    grant_id=str(grant.id),
                    status=grant.status.value,
                    permissions=grant.permissions,
                    expires_at=grant.expires_at.isoformat() if grant.expires_at else None,
                )
            )
