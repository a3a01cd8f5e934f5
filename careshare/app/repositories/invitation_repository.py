from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from careshare.domain.entities import MemberInvitation


class IInvitationRepository(ABC):
    """MemberInvitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[MemberInvitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[MemberInvitation]:
        """Get invitation by token"""
        pass

    @abstractmethod
    async def get_live_by_organization_and_email(
        self, organization_id: UUID, email: str, now: datetime
    ) -> Optional[MemberInvitation]:
        """Get an active, unused, unexpired invitation for this organization and email"""
        pass

    @abstractmethod
    async def list_live_by_organization(
        self, organization_id: UUID, now: datetime
    ) -> List[MemberInvitation]:
        """Get all active, unused, unexpired invitations of an organization"""
        pass

    @abstractmethod
    async def create(self, invitation: MemberInvitation) -> MemberInvitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: MemberInvitation) -> MemberInvitation:
        """Update existing invitation"""
        pass
