from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from careshare.app.services.clock import IClock
from careshare.domain.entities import MemberRole, Organization, OrganizationType, UserProfile

REPOSITORY_METHODS = {
    "users": ["get_by_id", "get_by_email", "create"],
    "profiles": [
        "get_by_id",
        "get_by_user_id",
        "get_by_email",
        "list_active_by_organization",
        "list_without_otp_flag",
        "create",
        "update",
    ],
    "organizations": ["get_by_id", "create"],
    "patients": ["get_by_id", "get_by_share_token", "update"],
    "invitations": [
        "get_by_id",
        "get_by_token",
        "get_live_by_organization_and_email",
        "list_live_by_organization",
        "create",
        "update",
    ],
    "partnerships": ["get_by_token", "create", "update"],
    "password_reset_tokens": ["create", "get_by_token", "list_unused_by_email", "update"],
    "otp_verifications": [
        "get_current",
        "get_verified",
        "get_legacy_used",
        "list_unused",
        "count_created_since",
        "create",
        "update",
        "delete",
    ],
    "access_grants": [
        "get_by_id",
        "list_open_by_patient_and_requester",
        "list_by_patient",
        "create",
        "update",
    ],
    "audit_events": ["create"],
}


def _echo(entity):
    return entity


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories; create/update return their argument"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for repository, methods in REPOSITORY_METHODS.items():
        repo = MagicMock()
        for method in methods:
            mock = AsyncMock(return_value=None)
            if method in ("create", "update"):
                mock.side_effect = _echo
            setattr(repo, method, mock)
        setattr(uow, repository, repo)

    uow.invitations.list_live_by_organization.return_value = []
    uow.profiles.list_active_by_organization.return_value = []
    uow.profiles.list_without_otp_flag.return_value = []
    uow.password_reset_tokens.list_unused_by_email.return_value = []
    uow.otp_verifications.list_unused.return_value = []
    uow.otp_verifications.count_created_since.return_value = 0
    uow.access_grants.list_open_by_patient_and_requester.return_value = []
    uow.access_grants.list_by_patient.return_value = []

    return uow


class FixedClock(IClock):
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current


@pytest.fixture
def now():
    return datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def clock(now):
    return FixedClock(now)


@pytest.fixture
def notifier():
    dispatcher = MagicMock()
    dispatcher.schedule = AsyncMock(return_value="job-1")
    return dispatcher


@pytest.fixture
def organization():
    return Organization(
        id=uuid4(),
        name="Sunrise Care",
        type=OrganizationType.aged_care,
        email="office@sunrise.example",
        owner_id=uuid4(),
    )


def make_profile(
    email="user@example.com",
    organization_id=None,
    role=None,
    requires_otp_verification=False,
    first_name="Ada",
    last_name="Lovelace",
):
    return UserProfile(
        id=uuid4(),
        user_id=uuid4(),
        first_name=first_name,
        last_name=last_name,
        email=email,
        organization_id=organization_id,
        role=role,
        requires_otp_verification=requires_otp_verification,
    )


@pytest.fixture
def owner_profile(organization):
    return make_profile(
        email="owner@sunrise.example",
        organization_id=organization.id,
        role=MemberRole.owner,
    )


@pytest.fixture
def profile_factory():
    return make_profile
