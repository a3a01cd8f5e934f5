from typing import List, Optional

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from careshare.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from careshare.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token(self, token: str) -> Optional[PasswordResetToken]:
        """Get password reset token by its value"""
        stmt = select(PasswordResetToken).where(PasswordResetToken.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_unused_by_email(self, email: str) -> List[PasswordResetToken]:
        stmt = select(PasswordResetToken).where(
            func.lower(PasswordResetToken.email) == email.strip().lower(),
            col(PasswordResetToken.is_used).is_(False),
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def update(self, token: PasswordResetToken) -> PasswordResetToken:
        """Update existing password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token
