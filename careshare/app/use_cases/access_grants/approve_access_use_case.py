"""
Approve Access Use Case
"""

from datetime import timedelta
from typing import Optional
from uuid import UUID

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.notification_dispatcher import (
    INotificationDispatcher,
    NotificationKind,
)
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, schedule_quietly
from careshare.domain.entities import AccessGrantStatus, AccessPermission, AuditEvent
from careshare.libs.result import Error, Result, Return

from .authorization import load_managed_grant
from .dtos import AccessGrantResponse, ApproveAccessCommand


class ApproveAccessUseCase:
    """
    Use case for approving a pending access request.

    Business Rules:
    - Only owner/admin of the patient's organization
    - Only pending grants can be approved
    - Permissions: non-empty subset of view, comment, view_medications
    - Expiry: a positive number of days, or never
    - The grantee is notified best-effort
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
        self, user_id: Optional[UUID], grant_id: UUID, command: ApproveAccessCommand
    ) -> Result[AccessGrantResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            managed = await load_managed_grant(
                self.uow, profile, grant_id, "approve access requests"
            )
            if managed.is_err():
                return Return.err(managed.error)
            grant, patient = managed.value

            if grant.status != AccessGrantStatus.pending:
                return Return.err(
                    Error(
                        "INVARIANT_VIOLATION",
                        f"Cannot approve a {grant.status.value} access grant",
                    )
                )

            allowed = {permission.value for permission in AccessPermission}
            permissions = list(dict.fromkeys(command.permissions))
            if not permissions or not set(permissions) <= allowed:
                return Return.err(
                    Error(
                        "INVALID_PERMISSIONS",
                        f"Permissions must be a non-empty subset of {sorted(allowed)}",
                    )
                )

            if not command.never_expires and (
                command.expires_in_days is None or command.expires_in_days <= 0
            ):
                return Return.err(
                    Error("INVALID_EXPIRY", "expires_in_days must be a positive number")
                )

            now = self.clock.now()
            grant.status = AccessGrantStatus.approved
            grant.permissions = permissions
            grant.expires_at = (
                None if command.never_expires else now + timedelta(days=command.expires_in_days)
            )
            grant.granted_at = now
            grant.granted_by_user_id = profile.user_id
            await self.uow.access_grants.update(grant)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=patient.organization_id,
                    user_id=profile.user_id,
                    action="access_approved",
                    event_metadata={
                        "grant_id": str(grant.id),
                        "patient_id": str(patient.id),
                        "permissions": permissions,
                    },
                )
            )

            grantee = await self.uow.profiles.get_by_user_id(grant.granted_to_user_id)
            organization = await self.uow.organizations.get_by_id(patient.organization_id)

            await self.uow.commit()

            if grantee is not None:
                await schedule_quietly(
                    self.notifier,
                    NotificationKind.PATIENT_ACCESS_GRANTED,
                    {
                        "to_email": grantee.email,
                        "patient_name": patient.full_name,
                        "granted_by_name": profile.full_name,
                        "organization_name": organization.name if organization else None,
                        "permissions": permissions,
                        "expires_at": grant.expires_at.isoformat() if grant.expires_at else None,
                    },
                )

            return Return.ok(
                AccessGrantResponse(
                    grant_id=str(grant.id),
                    status=grant.status.value,
                    permissions=grant.permissions,
                    expires_at=grant.expires_at.isoformat() if grant.expires_at else None,
                )
            )
