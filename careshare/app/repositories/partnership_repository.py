from abc import ABC, abstractmethod
from typing import Optional

from careshare.domain.entities import OrganizationPartnership


class IPartnershipRepository(ABC):
    """OrganizationPartnership repository interface - application layer"""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[OrganizationPartnership]:
        """Get partnership by partnership token"""
        pass

    @abstractmethod
    async def create(self, partnership: OrganizationPartnership) -> OrganizationPartnership:
        """Create a new partnership"""
        pass

    @abstractmethod
    async def update(self, partnership: OrganizationPartnership) -> OrganizationPartnership:
        """Update existing partnership"""
        pass
