from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from careshare.domain.entities import UserProfile


class IUserProfileRepository(ABC):
    """UserProfile repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, profile_id: UUID) -> Optional[UserProfile]:
        """Get profile by ID"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[UserProfile]:
        """Get profile of an authenticated user"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserProfile]:
        """Get profile by (lower-cased) email"""
        pass

    @abstractmethod
    async def list_active_by_organization(self, organization_id: UUID) -> List[UserProfile]:
        """Active profiles belonging to an organization, oldest first"""
        pass

    @abstractmethod
    async def list_without_otp_flag(self) -> List[UserProfile]:
        """Profiles whose requires_otp_verification was never set"""
        pass

    @abstractmethod
    async def create(self, profile: UserProfile) -> UserProfile:
        """Create a new profile"""
        pass

    @abstractmethod
    async def update(self, profile: UserProfile) -> UserProfile:
        """Update existing profile"""
        pass
