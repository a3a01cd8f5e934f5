from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from careshare.app.repositories.user_profile_repository import IUserProfileRepository
from careshare.domain.entities import UserProfile


class UserProfileRepository(IUserProfileRepository):
    """UserProfile repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, profile_id: UUID) -> Optional[UserProfile]:
        stmt = select(UserProfile).where(UserProfile.id == profile_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_id(self, user_id: UUID) -> Optional[UserProfile]:
        stmt = select(UserProfile).where(UserProfile.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[UserProfile]:
        """Case-insensitive lookup by email"""
        stmt = select(UserProfile).where(func.lower(UserProfile.email) == email.strip().lower())
        result = await self.session.exec(stmt)
        return result.first()

    async def list_active_by_organization(self, organization_id: UUID) -> List[UserProfile]:
        stmt = (
            select(UserProfile)
            .where(
                UserProfile.organization_id == organization_id,
                col(UserProfile.is_active).is_(True),
            )
            .order_by(col(UserProfile.created_at))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_without_otp_flag(self) -> List[UserProfile]:
        stmt = select(UserProfile).where(col(UserProfile.requires_otp_verification).is_(None))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, profile: UserProfile) -> UserProfile:
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def update(self, profile: UserProfile) -> UserProfile:
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile
