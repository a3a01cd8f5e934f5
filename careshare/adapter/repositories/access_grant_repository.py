from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from careshare.app.repositories.access_grant_repository import IAccessGrantRepository
from careshare.domain.entities import AccessGrantStatus, TokenAccessGrant


class AccessGrantRepository(IAccessGrantRepository):
    """TokenAccessGrant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, grant_id: UUID) -> Optional[TokenAccessGrant]:
        """Get grant by ID"""
        stmt = select(TokenAccessGrant).where(TokenAccessGrant.id == grant_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_open_by_patient_and_requester(
        self, patient_id: UUID, user_id: UUID
    ) -> List[TokenAccessGrant]:
        """Pending and approved grants, expired or not"""
        stmt = select(TokenAccessGrant).where(
            TokenAccessGrant.patient_id == patient_id,
            TokenAccessGrant.requested_by_user_id == user_id,
            col(TokenAccessGrant.is_active).is_(True),
            col(TokenAccessGrant.status).in_(
                [AccessGrantStatus.pending, AccessGrantStatus.approved]
            ),
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_patient(self, patient_id: UUID) -> List[TokenAccessGrant]:
        stmt = (
            select(TokenAccessGrant)
            .where(TokenAccessGrant.patient_id == patient_id)
            .order_by(col(TokenAccessGrant.requested_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, grant: TokenAccessGrant) -> TokenAccessGrant:
        """Create a new grant"""
        self.session.add(grant)
        await self.session.flush()
        await self.session.refresh(grant)
        return grant

    async def update(self, grant: TokenAccessGrant) -> TokenAccessGrant:
        """Update existing grant"""
        self.session.add(grant)
        await self.session.flush()
        await self.session.refresh(grant)
        return grant
