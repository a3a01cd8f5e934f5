"""
Lookup Profile By Email Use Case
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import normalize_email
from careshare.libs.result import Error, Result, Return

from .dtos import LookupProfileResponse, ProfileSummary


class LookupProfileUseCase:
    """
    Finds an active profile by email for access granting.

    Missing and inactive profiles both produce an empty response so the
    endpoint cannot be used to tell them apart.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: Optional[UUID], email: str) -> Result[LookupProfileResponse]:
        if user_id is None:
            return Return.err(Error("UNAUTHENTICATED", "Authentication required"))

        async with self.uow:
            profile = await self.uow.profiles.get_by_email(normalize_email(email))
            if profile is None or not profile.is_active:
                return Return.ok(LookupProfileResponse(profile=None))

            organization = None
            if profile.organization_id:
                organization = await self.uow.organizations.get_by_id(profile.organization_id)

            return Return.ok(
                LookupProfileResponse(
                    profile=ProfileSummary(
                        id=str(profile.id),
                        first_name=profile.first_name,
                        last_name=profile.last_name,
                        email=profile.email,
                        organization_name=organization.name if organization else "No Organization",
                        organization_type=organization.type.value if organization else "Individual",
                    )
                )
            )
