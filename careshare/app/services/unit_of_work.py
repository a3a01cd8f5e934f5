from abc import ABC, abstractmethod

from careshare.app.repositories.access_grant_repository import IAccessGrantRepository
from careshare.app.repositories.audit_event_repository import IAuditEventRepository
from careshare.app.repositories.invitation_repository import IInvitationRepository
from careshare.app.repositories.organization_repository import IOrganizationRepository
from careshare.app.repositories.otp_verification_repository import IOTPVerificationRepository
from careshare.app.repositories.partnership_repository import IPartnershipRepository
from careshare.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from careshare.app.repositories.patient_repository import IPatientRepository
from careshare.app.repositories.user_profile_repository import IUserProfileRepository
from careshare.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    profiles: IUserProfileRepository
    organizations: IOrganizationRepository
    patients: IPatientRepository
    invitations: IInvitationRepository
    partnerships: IPartnershipRepository
    password_reset_tokens: IPasswordResetTokenRepository
    otp_verifications: IOTPVerificationRepository
    access_grants: IAccessGrantRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
