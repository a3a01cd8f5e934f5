from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from careshare.domain.entities import OTPVerification


class IOTPVerificationRepository(ABC):
    """OTPVerification repository interface - application layer"""

    @abstractmethod
    async def get_current(self, user_id: UUID) -> Optional[OTPVerification]:
        """Get the newest OTP of a user that is neither used nor verified"""
        pass

    @abstractmethod
    async def get_verified(self, user_id: UUID) -> Optional[OTPVerification]:
        """Get any verified OTP of a user"""
        pass

    @abstractmethod
    async def get_legacy_used(self, user_id: UUID) -> Optional[OTPVerification]:
        """Get a used OTP written by the legacy system (code field set)"""
        pass

    @abstractmethod
    async def list_unused(self, user_id: UUID) -> List[OTPVerification]:
        """Get all unused OTPs of a user"""
        pass

    @abstractmethod
    async def count_created_since(self, user_id: UUID, since: datetime) -> int:
        """Count OTPs issued to a user after `since`"""
        pass

    @abstractmethod
    async def create(self, otp: OTPVerification) -> OTPVerification:
        """Create a new OTP"""
        pass

    @abstractmethod
    async def update(self, otp: OTPVerification) -> OTPVerification:
        """Update existing OTP"""
        pass

    @abstractmethod
    async def delete(self, otp: OTPVerification) -> None:
        """Delete an OTP"""
        pass
