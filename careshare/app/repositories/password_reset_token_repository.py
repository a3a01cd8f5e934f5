from abc import ABC, abstractmethod
from typing import List, Optional

from careshare.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token value"""
        pass

    @abstractmethod
    async def list_unused_by_email(self, email: str) -> List[PasswordResetToken]:
        """Get all tokens for an email that were never used"""
        pass

    @abstractmethod
    async def update(self, token: PasswordResetToken) -> PasswordResetToken:
        """Update existing password reset token"""
        pass
