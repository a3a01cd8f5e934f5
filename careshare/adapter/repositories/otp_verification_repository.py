from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from careshare.app.repositories.otp_verification_repository import IOTPVerificationRepository
from careshare.domain.entities import OTPVerification


class OTPVerificationRepository(IOTPVerificationRepository):
    """OTPVerification repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_current(self, user_id: UUID) -> Optional[OTPVerification]:
        stmt = (
            select(OTPVerification)
            .where(
                OTPVerification.user_id == user_id,
                col(OTPVerification.is_used).is_(False),
                col(OTPVerification.is_verified).is_(False),
            )
            .order_by(col(OTPVerification.created_at).desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_verified(self, user_id: UUID) -> Optional[OTPVerification]:
        stmt = select(OTPVerification).where(
            OTPVerification.user_id == user_id,
            col(OTPVerification.is_verified).is_(True),
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_legacy_used(self, user_id: UUID) -> Optional[OTPVerification]:
        stmt = select(OTPVerification).where(
            OTPVerification.user_id == user_id,
            col(OTPVerification.is_used).is_(True),
            col(OTPVerification.code).is_not(None),
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_unused(self, user_id: UUID) -> List[OTPVerification]:
        stmt = select(OTPVerification).where(
            OTPVerification.user_id == user_id,
            col(OTPVerification.is_used).is_(False),
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_created_since(self, user_id: UUID, since: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(OTPVerification)
            .where(
                OTPVerification.user_id == user_id,
                OTPVerification.created_at > since,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, otp: OTPVerification) -> OTPVerification:
        self.session.add(otp)
        await self.session.flush()
        await self.session.refresh(otp)
        return otp

    async def update(self, otp: OTPVerification) -> OTPVerification:
        self.session.add(otp)
        await self.session.flush()
        await self.session.refresh(otp)
        return otp

    async def delete(self, otp: OTPVerification) -> None:
        await self.session.delete(otp)
        await self.session.flush()
