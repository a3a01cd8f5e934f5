from sqlmodel.ext.asyncio.session import AsyncSession

from careshare.adapter.repositories.access_grant_repository import AccessGrantRepository
from careshare.adapter.repositories.audit_event_repository import AuditEventRepository
from careshare.adapter.repositories.invitation_repository import InvitationRepository
from careshare.adapter.repositories.organization_repository import OrganizationRepository
from careshare.adapter.repositories.otp_verification_repository import OTPVerificationRepository
from careshare.adapter.repositories.partnership_repository import PartnershipRepository
from careshare.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from careshare.adapter.repositories.patient_repository import PatientRepository
from careshare.adapter.repositories.user_profile_repository import UserProfileRepository
from careshare.adapter.repositories.user_repository import UserRepository
from careshare.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        self.users = UserRepository(self.session)
        self.profiles = UserProfileRepository(self.session)
        self.organizations = OrganizationRepository(self.session)
        self.patients = PatientRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.partnerships = PartnershipRepository(self.session)
        self.password_reset_tokens = PasswordResetTokenRepository(self.session)
        self.otp_verifications = OTPVerificationRepository(self.session)
        self.access_grants = AccessGrantRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
