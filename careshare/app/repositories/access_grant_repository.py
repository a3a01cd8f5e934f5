from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from careshare.domain.entities import TokenAccessGrant


class IAccessGrantRepository(ABC):
    """TokenAccessGrant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, grant_id: UUID) -> Optional[TokenAccessGrant]:
        """Get grant by ID"""
        pass

    @abstractmethod
    async def list_open_by_patient_and_requester(
        self, patient_id: UUID, user_id: UUID
    ) -> List[TokenAccessGrant]:
        """Get pending and approved grants a user holds for a patient"""
        pass

    @abstractmethod
    async def list_by_patient(self, patient_id: UUID) -> List[TokenAccessGrant]:
        """Get all grants of a patient, newest first"""
        pass

    @abstractmethod
    async def create(self, grant: TokenAccessGrant) -> TokenAccessGrant:
        """Create a new grant"""
        pass

    @abstractmethod
    async def update(self, grant: TokenAccessGrant) -> TokenAccessGrant:
        """Update existing grant"""
        pass
