from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from careshare.app.repositories.patient_repository import IPatientRepository
from careshare.domain.entities import Patient


class PatientRepository(IPatientRepository):
    """Patient repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, patient_id: UUID) -> Optional[Patient]:
        stmt = select(Patient).where(Patient.id == patient_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_share_token(self, share_token: str) -> Optional[Patient]:
        stmt = select(Patient).where(Patient.share_token == share_token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def update(self, patient: Patient) -> Patient:
        self.session.add(patient)
        await self.session.flush()
        await self.session.refresh(patient)
        return patient
