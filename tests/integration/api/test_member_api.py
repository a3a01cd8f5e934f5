import pytest
from httpx import AsyncClient


@pytest.fixture
def join_organization(client, register_user, create_profile):
    """Invite email into the owner's organization and sign it up with the token"""

    async def _join(owner_headers, email, role="member"):
        invite = (
            await client.post(
                "/api/organizations/invitations",
                json={"email": email, "role": role},
                headers=owner_headers,
            )
        ).json()
        _, headers = await register_user(email)
        profile = await create_profile(headers, email, invite_token=invite["invite_token"])
        return headers, profile["profile_id"]

    return _join


@pytest.mark.asyncio
async def test_member_lifecycle(client: AsyncClient, create_owner, join_organization):
    """List, promote and remove a member

    Given an organization with an owner and one member
    When the owner promotes the member and later removes them
    Then the listing reflects each change
    And the removed profile can join another organization
    """
    owner_headers, _ = await create_owner("owner@sunrise.org")
    nurse_headers, nurse_id = await join_organization(owner_headers, "nurse@example.com")

    listed = await client.get("/api/organizations/members", headers=owner_headers)
    assert listed.status_code == 200
    roles = {m["email"]: m["role"] for m in listed.json()["members"]}
    assert roles == {"owner@sunrise.org": "owner", "nurse@example.com": "member"}

    promoted = await client.put(
        f"/api/organizations/members/{nurse_id}", json={"role": "admin"}, headers=owner_headers
    )
    assert promoted.status_code == 200
    assert promoted.json() == {"member_id": nurse_id, "old_role": "member", "new_role": "admin"}

    removed = await client.delete(f"/api/organizations/members/{nurse_id}", headers=owner_headers)
    assert removed.status_code == 200
    assert removed.json()["status"] == "removed"

    after = await client.get("/api/organizations/members", headers=owner_headers)
    assert [m["email"] for m in after.json()["members"]] == ["owner@sunrise.org"]

    other_headers, other_org = await create_owner("owner@clinic.org", "Corner Clinic")
    invite = (
        await client.post(
            "/api/organizations/invitations",
            json={"email": "nurse@example.com", "role": "viewer"},
            headers=other_headers,
        )
    ).json()
    accepted = await client.post(
        "/api/invitations/accept",
        json={"token": invite["invite_token"]},
        headers=nurse_headers,
    )
    assert accepted.status_code == 200
    assert accepted.json()["organization_id"] == other_org


@pytest.mark.asyncio
async def test_owner_cannot_be_demoted_or_removed(
    client: AsyncClient, create_owner, join_organization
):
    owner_headers, _ = await create_owner("owner@sunrise.org")
    admin_headers, _ = await join_organization(owner_headers, "admin@example.com", role="admin")
    listed = (await client.get("/api/organizations/members", headers=admin_headers)).json()
    owner_id = next(m["id"] for m in listed["members"] if m["role"] == "owner")

    demote = await client.put(
        f"/api/organizations/members/{owner_id}", json={"role": "viewer"}, headers=admin_headers
    )
    remove = await client.delete(f"/api/organizations/members/{owner_id}", headers=admin_headers)

    assert demote.status_code == 409
    assert remove.status_code == 409
    assert remove.json()["error"]["code"] == "INVARIANT_VIOLATION"


@pytest.mark.asyncio
async def test_member_cannot_remove_colleague(
    client: AsyncClient, create_owner, join_organization
):
    owner_headers, _ = await create_owner("owner@sunrise.org")
    member_headers, _ = await join_organization(owner_headers, "one@example.com")
    _, colleague_id = await join_organization(owner_headers, "two@example.com")

    response = await client.delete(
        f"/api/organizations/members/{colleague_id}", headers=member_headers
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_PERMISSIONS"


@pytest.mark.asyncio
async def test_other_organization_member_is_not_found(
    client: AsyncClient, create_owner, join_organization
):
    first_headers, _ = await create_owner("owner@first.org", "First")
    second_headers, _ = await create_owner("owner@second.org", "Second")
    _, member_id = await join_organization(second_headers, "staff@second.org")

    response = await client.delete(
        f"/api/organizations/members/{member_id}", headers=first_headers
    )

    assert response.status_code == 404
