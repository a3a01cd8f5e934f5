"""
Check Shared Access Use Case

Resolves what the caller may do with a patient shared through a share token.
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile
from careshare.domain.entities import AccessGrantStatus
from careshare.domain.policy import grant_is_expired
from careshare.libs.result import Error, Result, Return

from .dtos import SharedAccessResponse


class CheckSharedAccessUseCase:
    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: Optional[UUID], share_token: str
    ) -> Result[SharedAccessResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            patient = await self.uow.patients.get_by_share_token(share_token.strip().upper())
            if patient is None or not patient.is_active:
                return Return.err(Error("NOT_FOUND", "Invalid share token"))

            now = self.clock.now()
            grants = await self.uow.access_grants.list_open_by_patient_and_requester(
                patient.id, profile.user_id
            )
            for grant in grants:
                if grant.status == AccessGrantStatus.approved and not grant_is_expired(
                    grant.expires_at, now
                ):
                    return Return.ok(
                        SharedAccessResponse(
                            grant_id=str(grant.id),
                            patient_id=str(patient.id),
                            patient_name=patient.full_name,
                            permissions=grant.permissions,
                            expires_at=grant.expires_at.isoformat() if grant.expires_at else None,
                        )
                    )

            return Return.err(Error("NOT_FOUND", "No active access to this patient"))
