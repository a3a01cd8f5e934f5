from uuid import uuid4

import pytest

from careshare.app.use_cases.organizations import (
    ChangeMemberRoleUseCase,
    ListMembersUseCase,
    RemoveMemberUseCase,
)
from careshare.domain.entities import MemberRole


@pytest.fixture
def caller(mock_uow, owner_profile):
    mock_uow.profiles.get_by_user_id.return_value = owner_profile
    return owner_profile


@pytest.fixture
def member(mock_uow, organization, profile_factory):
    profile = profile_factory(
        email="nurse@sunrise.example", organization_id=organization.id, role=MemberRole.member
    )
    mock_uow.profiles.get_by_id.side_effect = lambda profile_id: (
        profile if profile_id == profile.id else None
    )
    return profile


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_members_of_caller_organization(mock_uow, caller, member, organization):
    mock_uow.profiles.list_active_by_organization.return_value = [caller, member]

    result = await ListMembersUseCase(mock_uow).execute(caller.user_id)

    assert [m.email for m in result.value.members] == [caller.email, member.email]
    assert result.value.members[1].role == "member"
    mock_uow.profiles.list_active_by_organization.assert_awaited_once_with(organization.id)


@pytest.mark.asyncio
async def test_list_members_without_organization_is_empty(mock_uow, profile_factory):
    loner = profile_factory()
    mock_uow.profiles.get_by_user_id.return_value = loner

    result = await ListMembersUseCase(mock_uow).execute(loner.user_id)

    assert result.value.members == []
    mock_uow.profiles.list_active_by_organization.assert_not_awaited()


# ---------------------------------------------------------------------------
# Change role
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_change_member_role(mock_uow, caller, member):
    result = await ChangeMemberRoleUseCase(mock_uow).execute(caller.user_id, member.id, "admin")

    assert result.is_ok()
    assert result.value.old_role == "member"
    assert result.value.new_role == "admin"
    assert member.role == MemberRole.admin
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "role_changed"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("role", ["owner", "superuser"])
async def test_change_member_role_rejects_invalid_role(mock_uow, caller, member, role):
    result = await ChangeMemberRoleUseCase(mock_uow).execute(caller.user_id, member.id, role)

    assert result.error.code == "INVALID_ROLE"
    assert member.role == MemberRole.member


@pytest.mark.asyncio
async def test_owner_role_cannot_be_changed(mock_uow, organization, profile_factory):
    admin = profile_factory(organization_id=organization.id, role=MemberRole.admin)
    owner = profile_factory(organization_id=organization.id, role=MemberRole.owner)
    mock_uow.profiles.get_by_user_id.return_value = admin
    mock_uow.profiles.get_by_id.return_value = owner

    result = await ChangeMemberRoleUseCase(mock_uow).execute(admin.user_id, owner.id, "viewer")

    assert result.error.code == "INVARIANT_VIOLATION"
    assert owner.role == MemberRole.owner
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_viewer_cannot_change_roles(mock_uow, organization, member, profile_factory):
    viewer = profile_factory(organization_id=organization.id, role=MemberRole.viewer)
    mock_uow.profiles.get_by_user_id.return_value = viewer

    result = await ChangeMemberRoleUseCase(mock_uow).execute(viewer.user_id, member.id, "admin")

    assert result.error.code == "INSUFFICIENT_PERMISSIONS"


@pytest.mark.asyncio
async def test_change_role_of_other_organization_member_is_not_found(
    mock_uow, caller, profile_factory
):
    outsider = profile_factory(organization_id=uuid4(), role=MemberRole.member)
    mock_uow.profiles.get_by_id.return_value = outsider

    result = await ChangeMemberRoleUseCase(mock_uow).execute(caller.user_id, outsider.id, "admin")

    assert result.error.code == "NOT_FOUND"


# ---------------------------------------------------------------------------
# Remove
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_remove_member_clears_organization_and_role(
    mock_uow, caller, member, organization
):
    result = await RemoveMemberUseCase(mock_uow).execute(caller.user_id, member.id)

    assert result.is_ok()
    assert result.value.status == "removed"
    assert member.organization_id is None
    assert member.role is None
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "member_removed"
    assert audit.organization_id == organization.id
    assert audit.event_metadata["removed_role"] == "member"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_owner_cannot_be_removed(mock_uow, caller):
    mock_uow.profiles.get_by_id.return_value = caller

    result = await RemoveMemberUseCase(mock_uow).execute(caller.user_id, caller.id)

    assert result.error.code == "INVARIANT_VIOLATION"
    assert caller.organization_id is not None


@pytest.mark.asyncio
async def test_remove_unknown_member_is_not_found(mock_uow, caller):
    result = await RemoveMemberUseCase(mock_uow).execute(caller.user_id, uuid4())

    assert result.error.code == "NOT_FOUND"
    mock_uow.profiles.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_remove_member_requires_authentication(mock_uow):
    result = await RemoveMemberUseCase(mock_uow).execute(None, uuid4())

    assert result.error.code == "UNAUTHENTICATED"
