"""
Authorization checks for acting on a patient as its owning organization.
"""

from typing import Tuple
from uuid import UUID

from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import require_manager
from careshare.domain.entities import Patient, TokenAccessGrant, UserProfile
from careshare.libs.result import Error, Result, Return


async def load_managed_patient(
    uow: UnitOfWork, profile: UserProfile, patient_id: UUID, action: str
) -> Result[Patient]:
    """
    Patient the caller may manage sharing for.

    Patients of other organizations are reported as missing.
    """
    patient = await uow.patients.get_by_id(patient_id)
    if patient is None or not patient.is_active:
        return Return.err(Error("NOT_FOUND", "Patient not found"))

    if profile.organization_id != patient.organization_id:
        return Return.err(Error("NOT_FOUND", "Patient not found"))

    denied = require_manager(profile, action)
    if denied:
        return Return.err(denied)

    return Return.ok(patient)


async def load_managed_grant(
    uow: UnitOfWork, profile: UserProfile, grant_id: UUID, action: str
) -> Result[Tuple[TokenAccessGrant, Patient]]:
    grant = await uow.access_grants.get_by_id(grant_id)
    if grant is None:
        return Return.err(Error("NOT_FOUND", "Access grant not found"))

    patient = await load_managed_patient(uow, profile, grant.patient_id, action)
    if patient.is_err():
        if patient.error.code == "NOT_FOUND":
            return Return.err(Error("NOT_FOUND", "Access grant not found"))
        return Return.err(patient.error)

    return Return.ok((grant, patient.value))
