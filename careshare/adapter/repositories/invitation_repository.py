from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from careshare.app.repositories.invitation_repository import IInvitationRepository
from careshare.domain.entities import MemberInvitation


class InvitationRepository(IInvitationRepository):
    """MemberInvitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[MemberInvitation]:
        """Get invitation by ID"""
        stmt = select(MemberInvitation).where(MemberInvitation.id == invitation_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token(self, token: str) -> Optional[MemberInvitation]:
        """Get invitation by token"""
        stmt = select(MemberInvitation).where(MemberInvitation.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_live_by_organization_and_email(
        self, organization_id: UUID, email: str, now: datetime
    ) -> Optional[MemberInvitation]:
        """Get a live invitation for this organization and email"""
        stmt = select(MemberInvitation).where(
            MemberInvitation.organization_id == organization_id,
            func.lower(MemberInvitation.email) == email.strip().lower(),
            col(MemberInvitation.is_active).is_(True),
            col(MemberInvitation.is_used).is_(False),
            MemberInvitation.expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_live_by_organization(
        self, organization_id: UUID, now: datetime
    ) -> List[MemberInvitation]:
        """Get live invitations of an organization, newest first"""
        stmt = (
            select(MemberInvitation)
            .where(
                MemberInvitation.organization_id == organization_id,
                col(MemberInvitation.is_active).is_(True),
                col(MemberInvitation.is_used).is_(False),
                MemberInvitation.expires_at > now,
            )
            .order_by(col(MemberInvitation.created_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invitation: MemberInvitation) -> MemberInvitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: MemberInvitation) -> MemberInvitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation
