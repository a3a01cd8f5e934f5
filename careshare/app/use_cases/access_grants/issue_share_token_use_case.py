"""
Issue Share Token Use Case

Gives a patient a new public share token, replacing any previous one.
"""

from typing import Optional
from uuid import UUID

from careshare.app.services.token_issuer import DEFAULT_MAX_ATTEMPTS, issue_unique_token
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile
from careshare.domain.entities import AuditEvent
from careshare.domain.tokens import generate_share_token
from careshare.libs.result import Result, Return

from .authorization import load_managed_patient
from .dtos import IssueShareTokenResponse


class IssueShareTokenUseCase:
    """
    Use case for issuing a patient share token.

    Business Rules:
    - Only owner/admin of the patient's organization
    - Token PAT-XXXX-XXXX-XXXX, unique across patients
    - Existing grants keep working; only new requests need the new token
    """

    def __init__(self, uow: UnitOfWork, max_token_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.uow = uow
        self.max_token_attempts = max_token_attempts

    async def execute(
        self, user_id: Optional[UUID], patient_id: UUID
    ) -> Result[IssueShareTokenResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            managed = await load_managed_patient(
                self.uow, profile, patient_id, "share patients"
            )
            if managed.is_err():
                return Return.err(managed.error)
            patient = managed.value

            async def token_taken(candidate: str) -> bool:
                return await self.uow.patients.get_by_share_token(candidate) is not None

            token_result = await issue_unique_token(
                generate_share_token, token_taken, self.max_token_attempts
            )
            if token_result.is_err():
                return Return.err(token_result.error)

            patient.share_token = token_result.value
            await self.uow.patients.update(patient)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=patient.organization_id,
                    user_id=profile.user_id,
                    action="share_token_issued",
                    event_metadata={"patient_id": str(patient.id)},
                )
            )

            await self.uow.commit()

            return Return.ok(
                IssueShareTokenResponse(patient_id=str(patient.id), share_token=patient.share_token)
            )
