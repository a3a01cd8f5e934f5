from datetime import timedelta
from uuid import uuid4

import pytest

from careshare.app.use_cases.organizations import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    ListPendingInvitationsUseCase,
)
from careshare.domain.entities import MemberInvitation, MemberRole


@pytest.fixture
def invitation(organization, now):
    return MemberInvitation(
        organization_id=organization.id,
        invited_by=uuid4(),
        email="invitee@example.com",
        role=MemberRole.admin,
        token="ABCD-EFGH-IJKL-MNOP",
        expires_at=now + timedelta(days=7),
        created_at=now,
    )


@pytest.fixture
def invitee(mock_uow, profile_factory):
    profile = profile_factory(email="Invitee@Example.com")
    mock_uow.profiles.get_by_user_id.return_value = profile
    return profile


@pytest.mark.asyncio
async def test_successful_acceptance(mock_uow, clock, now, invitation, invitee, organization):
    mock_uow.invitations.get_by_token.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow, clock).execute(
        invitee.user_id, " abcd-efgh-ijkl-mnop "
    )

    assert result.is_ok()
    assert result.value.organization_id == str(organization.id)
    assert result.value.role == "admin"
    mock_uow.invitations.get_by_token.assert_awaited_once_with("ABCD-EFGH-IJKL-MNOP")

    assert invitee.organization_id == organization.id
    assert invitee.role == MemberRole.admin
    assert invitee.setup_completed is True
    assert invitation.is_used is True
    assert invitation.used_by == invitee.id
    assert invitation.used_at == now
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_second_acceptance_is_already_used(mock_uow, clock, invitation, invitee):
    mock_uow.invitations.get_by_token.return_value = invitation
    use_case = AcceptInvitationUseCase(mock_uow, clock)

    first = await use_case.execute(invitee.user_id, invitation.token)
    second = await use_case.execute(invitee.user_id, invitation.token)

    assert first.is_ok()
    assert second.is_err()
    assert second.error.code == "ALREADY_USED"


@pytest.mark.asyncio
async def test_expired_invitation(mock_uow, clock, now, invitation, invitee):
    invitation.expires_at = now - timedelta(seconds=1)
    mock_uow.invitations.get_by_token.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow, clock).execute(
        invitee.user_id, invitation.token
    )

    assert result.is_err()
    assert result.error.code == "EXPIRED"
    assert invitee.organization_id is None
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_used_is_reported_before_expired(mock_uow, clock, now, invitation, invitee):
    invitation.is_used = True
    invitation.used_at = now - timedelta(days=8)
    invitation.expires_at = now - timedelta(days=1)
    mock_uow.invitations.get_by_token.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow, clock).execute(
        invitee.user_id, invitation.token
    )

    assert result.error.code == "ALREADY_USED"


@pytest.mark.asyncio
async def test_email_mismatch(mock_uow, clock, invitation, profile_factory):
    stranger = profile_factory(email="stranger@example.com")
    mock_uow.profiles.get_by_user_id.return_value = stranger
    mock_uow.invitations.get_by_token.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow, clock).execute(
        stranger.user_id, invitation.token
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_MISMATCH"
    assert invitation.is_used is False


@pytest.mark.asyncio
async def test_caller_already_in_organization(mock_uow, clock, invitation, invitee):
    invitee.organization_id = uuid4()
    invitee.role = MemberRole.member
    mock_uow.invitations.get_by_token.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow, clock).execute(
        invitee.user_id, invitation.token
    )

    assert result.error.code == "INVARIANT_VIOLATION"


@pytest.mark.asyncio
async def test_unknown_and_cancelled_tokens(mock_uow, clock, invitation, invitee):
    use_case = AcceptInvitationUseCase(mock_uow, clock)

    missing = await use_case.execute(invitee.user_id, "NOPE-NOPE-NOPE-NOPE")
    assert missing.error.code == "NOT_FOUND"

    invitation.is_active = False
    mock_uow.invitations.get_by_token.return_value = invitation
    cancelled = await use_case.execute(invitee.user_id, invitation.token)
    assert cancelled.error.code == "NOT_FOUND"


@pytest.mark.asyncio
async def test_unauthenticated(mock_uow, clock):
    result = await AcceptInvitationUseCase(mock_uow, clock).execute(None, "ABCD-EFGH-IJKL-MNOP")

    assert result.error.code == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_cancel_invitation(mock_uow, owner_profile, invitation):
    mock_uow.profiles.get_by_user_id.return_value = owner_profile
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await CancelInvitationUseCase(mock_uow).execute(owner_profile.user_id, invitation.id)

    assert result.is_ok()
    assert result.value.status == "cancelled"
    assert invitation.is_active is False
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_cancel_invitation_of_other_organization(mock_uow, owner_profile, invitation):
    invitation.organization_id = uuid4()
    mock_uow.profiles.get_by_user_id.return_value = owner_profile
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await CancelInvitationUseCase(mock_uow).execute(owner_profile.user_id, invitation.id)

    assert result.error.code == "NOT_FOUND"
    assert invitation.is_active is True


@pytest.mark.asyncio
async def test_viewer_cannot_cancel(mock_uow, profile_factory, organization, invitation):
    viewer = profile_factory(organization_id=organization.id, role=MemberRole.viewer)
    mock_uow.profiles.get_by_user_id.return_value = viewer
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await CancelInvitationUseCase(mock_uow).execute(viewer.user_id, invitation.id)

    assert result.error.code == "INSUFFICIENT_PERMISSIONS"


@pytest.mark.asyncio
async def test_list_pending_invitations(mock_uow, clock, now, owner_profile, invitation):
    mock_uow.profiles.get_by_user_id.return_value = owner_profile
    mock_uow.invitations.list_live_by_organization.return_value = [invitation]

    result = await ListPendingInvitationsUseCase(mock_uow, clock).execute(owner_profile.user_id)

    assert result.is_ok()
    assert [i.email for i in result.value.invitations] == ["invitee@example.com"]
    mock_uow.invitations.list_live_by_organization.assert_awaited_once_with(
        owner_profile.organization_id, now
    )


@pytest.mark.asyncio
async def test_list_pending_invitations_without_organization(mock_uow, clock, profile_factory):
    loner = profile_factory()
    mock_uow.profiles.get_by_user_id.return_value = loner

    result = await ListPendingInvitationsUseCase(mock_uow, clock).execute(loner.user_id)

    assert result.is_ok()
    assert result.value.invitations == []
