from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from careshare.domain.entities import Patient


class IPatientRepository(ABC):
    """Patient repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, patient_id: UUID) -> Optional[Patient]:
        """Get patient by ID"""
        pass

    @abstractmethod
    async def get_by_share_token(self, share_token: str) -> Optional[Patient]:
        """Get patient by share token"""
        pass

    @abstractmethod
    async def update(self, patient: Patient) -> Patient:
        """Update existing patient"""
        pass
