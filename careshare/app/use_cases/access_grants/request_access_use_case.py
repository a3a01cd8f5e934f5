"""
Request Access Use Case

A user outside the patient's organization asks for access using the
patient's share token.
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.notification_dispatcher import (
    INotificationDispatcher,
    NotificationKind,
)
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, schedule_quietly
from careshare.domain.entities import AccessGrantStatus, AuditEvent, TokenAccessGrant
from careshare.domain.policy import grant_is_expired
from careshare.libs.result import Error, Result, Return

from .dtos import RequestAccessResponse


class RequestAccessUseCase:
    """
    Use case for requesting cross-organization access to a patient.

    Business Rules:
    - Share token must resolve to an active patient
    - Members of the owning organization never need a grant
    - A pending request blocks a new one (ALREADY_PENDING)
    - An approved, unexpired grant short-circuits to success without
      creating a new record
    - The owning organization is notified best-effort
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotificationDispatcher,
        clock: Optional[IClock] = None,
    ):
        self.uow = uow
        self.notifier = notifier
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: Optional[UUID], share_token: str
    ) -> Result[RequestAccessResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            token = share_token.strip().upper()
            patient = await self.uow.patients.get_by_share_token(token)
            if patient is None or not patient.is_active:
                return Return.err(Error("NOT_FOUND", "Invalid share token"))

            if profile.organization_id == patient.organization_id:
                return Return.err(
                    Error(
                        "INVARIANT_VIOLATION",
                        "Patient already belongs to your organization",
                    )
                )

            now = self.clock.now()
            open_grants = await self.uow.access_grants.list_open_by_patient_and_requester(
                patient.id, profile.user_id
            )
            for existing in open_grants:
                if existing.status == AccessGrantStatus.pending:
                    return Return.err(
                        Error("ALREADY_PENDING", "Access request is already pending")
                    )
                if existing.status == AccessGrantStatus.approved and not grant_is_expired(
                    existing.expires_at, now
                ):
                    return Return.ok(
                        RequestAccessResponse(
                            grant_id=str(existing.id),
                            status=existing.status.value,
                            already_granted=True,
                        )
                    )

            grant = TokenAccessGrant(
                patient_id=patient.id,
                share_token=token,
                requested_by_user_id=profile.user_id,
                requested_by_org_id=profile.organization_id,
                granted_to_user_id=profile.user_id,
                granted_to_org_id=profile.organization_id,
                requested_at=now,
            )
            await self.uow.access_grants.create(grant)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=patient.organization_id,
                    user_id=profile.user_id,
                    action="access_requested",
                    event_metadata={
                        "grant_id": str(grant.id),
                        "patient_id": str(patient.id),
                    },
                )
            )

            await self.uow.commit()

            await schedule_quietly(
                self.notifier,
                NotificationKind.ACCESS_REQUEST,
                {
                    "organization_id": str(patient.organization_id),
                    "patient_id": str(patient.id),
                    "grant_id": str(grant.id),
                    "requester_name": profile.full_name,
                    "requester_email": profile.email,
                },
            )

            return Return.ok(
                RequestAccessResponse(grant_id=str(grant.id), status=grant.status.value)
            )
