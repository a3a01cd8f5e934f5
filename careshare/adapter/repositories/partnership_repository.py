from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from careshare.app.repositories.partnership_repository import IPartnershipRepository
from careshare.domain.entities import OrganizationPartnership


class PartnershipRepository(IPartnershipRepository):
    """OrganizationPartnership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token(self, token: str) -> Optional[OrganizationPartnership]:
        stmt = select(OrganizationPartnership).where(
            OrganizationPartnership.partnership_token == token
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, partnership: OrganizationPartnership) -> OrganizationPartnership:
        self.session.add(partnership)
        await self.session.flush()
        await self.session.refresh(partnership)
        return partnership

    async def update(self, partnership: OrganizationPartnership) -> OrganizationPartnership:
        self.session.add(partnership)
        await self.session.flush()
        await self.session.refresh(partnership)
        return partnership
