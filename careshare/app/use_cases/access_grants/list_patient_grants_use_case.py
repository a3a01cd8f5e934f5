"""
List Patient Access Grants Use Case
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile
from careshare.domain.entities import AccessGrantStatus, TokenAccessGrant
from careshare.domain.policy import grant_is_expired
from careshare.libs.result import Result, Return

from .authorization import load_managed_patient
from .dtos import AccessGrantView, ListAccessGrantsResponse


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class ListPatientGrantsUseCase:
    """
    Lists every grant for a patient, newest first.

    Expiry is computed here from expires_at; approved grants past their
    deadline are reported with effective_status "expired".
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: Optional[UUID], patient_id: UUID
    ) -> Result[ListAccessGrantsResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)

            managed = await load_managed_patient(
                self.uow, caller.value, patient_id, "view access grants"
            )
            if managed.is_err():
                return Return.err(managed.error)

            now = self.clock.now()
            grants = await self.uow.access_grants.list_by_patient(patient_id)

            return Return.ok(
                ListAccessGrantsResponse(grants=[self._view(grant, now) for grant in grants])
            )

    @staticmethod
    def _view(grant: TokenAccessGrant, now: datetime) -> AccessGrantView:
        expired = grant_is_expired(grant.expires_at, now)
        effective = grant.status.value
        if grant.status == AccessGrantStatus.approved and expired:
            effective = "expired"

        return AccessGrantView(
            id=str(grant.id),
            patient_id=str(grant.patient_id),
            requested_by_user_id=str(grant.requested_by_user_id),
            requested_by_org_id=str(grant.requested_by_org_id) if grant.requested_by_org_id else None,
            status=grant.status.value,
            effective_status=effective,
            is_expired=expired,
            permissions=grant.permissions or [],
            expires_at=_iso(grant.expires_at),
            requested_at=grant.requested_at.isoformat(),
            granted_at=_iso(grant.granted_at),
            denied_at=_iso(grant.denied_at),
            revoked_at=_iso(grant.revoked_at),
        )
