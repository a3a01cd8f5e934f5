"""
Create Organization Use Case

Creates an organization and makes the caller its owner.
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, normalize_email
from careshare.domain.entities import AuditEvent, MemberRole, Organization, OrganizationType
from careshare.libs.result import Error, Result, Return

from .dtos import CreateOrganizationCommand, CreateOrganizationResponse


class CreateOrganizationUseCase:
    """
    Use case for creating an organization.

    Business Rules:
    - Caller must have a profile
    - A user belongs to at most one organization
    - Creator becomes owner and skips the setup step
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: Optional[UUID], command: CreateOrganizationCommand
    ) -> Result[CreateOrganizationResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            if profile.organization_id is not None:
                return Return.err(
                    Error(
                        "INVARIANT_VIOLATION",
                        "User already belongs to an organization",
                    )
                )

            try:
                organization_type = OrganizationType(command.type)
            except ValueError:
                return Return.err(
                    Error(
                        "INVALID_ORGANIZATION_TYPE",
                        f"Invalid organization type: {command.type}",
                    )
                )

            organization = Organization(
                name=command.name.strip(),
                type=organization_type,
                email=normalize_email(command.email),
                phone_number=command.phone_number,
                owner_id=profile.id,
            )
            await self.uow.organizations.create(organization)

            profile.organization_id = organization.id
            profile.role = MemberRole.owner
            profile.setup_completed = True
            await self.uow.profiles.update(profile)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization.id,
                    user_id=profile.user_id,
                    action="organization_created",
                    event_metadata={"name": organization.name},
                )
            )

            await self.uow.commit()

            return Return.ok(
                CreateOrganizationResponse(
                    organization_id=str(organization.id),
                    role=MemberRole.owner.value,
                )
            )
