import pytest
from httpx import AsyncClient
from sqlmodel import select

from careshare.domain.entities import AuditEvent, MemberInvitation


@pytest.mark.asyncio
async def test_invited_user_signs_up_into_organization(
    client: AsyncClient, db_session, dispatcher, create_owner, register_user, create_profile
):
    """Invite then sign up with the emailed token

    Given an owner invites nurse@example.com
    When that person creates a profile with the invitation token
    Then the profile joins the organization with the invited role
    And no OTP verification is required
    """
    owner_headers, organization_id = await create_owner("owner@sunrise.org")

    invite_response = await client.post(
        "/api/organizations/invitations",
        json={"email": "Nurse@Example.com", "role": "member"},
        headers=owner_headers,
    )
    assert invite_response.status_code == 201
    invite = invite_response.json()
    assert invite["notification_scheduled"] is True

    payload = dispatcher.last("member_invitation")
    assert payload["invite_email"] == "nurse@example.com"
    assert payload["invite_token"] == invite["invite_token"]
    assert payload["organization_name"] == "Sunrise Care"

    _, nurse_headers = await register_user("nurse@example.com")
    profile = await create_profile(
        nurse_headers, "nurse@example.com", invite_token=invite["invite_token"]
    )

    assert profile["organization_id"] == organization_id
    assert profile["role"] == "member"
    assert profile["setup_completed"] is True
    assert profile["requires_otp_verification"] is False

    result = await db_session.exec(
        select(MemberInvitation).where(MemberInvitation.token == invite["invite_token"])
    )
    invitation = result.one()
    assert invitation.is_used is True

    pending = await client.get("/api/organizations/invitations", headers=owner_headers)
    assert pending.status_code == 200
    assert pending.json()["invitations"] == []


@pytest.mark.asyncio
async def test_existing_user_accepts_invitation(
    client: AsyncClient, db_session, create_owner, register_user, create_profile
):
    """Accept an invitation after signing up without one

    Given a user already has a profile but no organization
    When they accept an invitation addressed to their email
    Then they join the organization
    And the token cannot be used again
    """
    owner_headers, organization_id = await create_owner("owner@sunrise.org")
    invite = (
        await client.post(
            "/api/organizations/invitations",
            json={"email": "carer@example.com", "role": "viewer"},
            headers=owner_headers,
        )
    ).json()

    _, carer_headers = await register_user("carer@example.com")
    await create_profile(carer_headers, "carer@example.com")

    accept_response = await client.post(
        "/api/invitations/accept",
        json={"token": invite["invite_token"].lower()},
        headers=carer_headers,
    )
    assert accept_response.status_code == 200
    assert accept_response.json() == {"organization_id": organization_id, "role": "viewer"}

    again = await client.post(
        "/api/invitations/accept",
        json={"token": invite["invite_token"]},
        headers=carer_headers,
    )
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ALREADY_USED"

    result = await db_session.exec(
        select(AuditEvent).where(AuditEvent.action == "invitation_accepted")
    )
    assert len(result.all()) == 1


@pytest.mark.asyncio
async def test_accept_invitation_with_other_email_is_rejected(
    client: AsyncClient, create_owner, register_user, create_profile
):
    owner_headers, _ = await create_owner("owner@sunrise.org")
    invite = (
        await client.post(
            "/api/organizations/invitations",
            json={"email": "someone@example.com"},
            headers=owner_headers,
        )
    ).json()

    _, other_headers = await register_user("other@example.com")
    await create_profile(other_headers, "other@example.com")

    response = await client.post(
        "/api/invitations/accept",
        json={"token": invite["invite_token"]},
        headers=other_headers,
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "EMAIL_MISMATCH"


@pytest.mark.asyncio
async def test_duplicate_live_invitation_conflicts(client: AsyncClient, create_owner):
    owner_headers, _ = await create_owner("owner@sunrise.org")
    body = {"email": "dup@example.com", "role": "member"}

    first = await client.post("/api/organizations/invitations", json=body, headers=owner_headers)
    second = await client.post("/api/organizations/invitations", json=body, headers=owner_headers)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_invitation_still_created_when_email_cannot_be_scheduled(
    client: AsyncClient, dispatcher, create_owner
):
    owner_headers, _ = await create_owner("owner@sunrise.org")
    dispatcher.fail = True

    response = await client.post(
        "/api/organizations/invitations",
        json={"email": "late@example.com"},
        headers=owner_headers,
    )

    assert response.status_code == 201
    assert response.json()["notification_scheduled"] is False
    assert response.json()["invite_token"]


@pytest.mark.asyncio
async def test_member_cannot_invite(
    client: AsyncClient, create_owner, register_user, create_profile
):
    owner_headers, _ = await create_owner("owner@sunrise.org")
    invite = (
        await client.post(
            "/api/organizations/invitations",
            json={"email": "member@example.com", "role": "member"},
            headers=owner_headers,
        )
    ).json()
    _, member_headers = await register_user("member@example.com")
    await create_profile(member_headers, "member@example.com", invite_token=invite["invite_token"])

    response = await client.post(
        "/api/organizations/invitations",
        json={"email": "friend@example.com"},
        headers=member_headers,
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_PERMISSIONS"


@pytest.mark.asyncio
async def test_cancelled_invitation_cannot_be_accepted(
    client: AsyncClient, create_owner, register_user, create_profile
):
    owner_headers, _ = await create_owner("owner@sunrise.org")
    invite = (
        await client.post(
            "/api/organizations/invitations",
            json={"email": "gone@example.com"},
            headers=owner_headers,
        )
    ).json()

    cancel = await client.delete(
        f"/api/invitations/{invite['invitation_id']}", headers=owner_headers
    )
    assert cancel.status_code == 200
    assert cancel.json()["status"] == "cancelled"

    _, headers = await register_user("gone@example.com")
    await create_profile(headers, "gone@example.com")
    response = await client.post(
        "/api/invitations/accept", json={"token": invite["invite_token"]}, headers=headers
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_partnership_between_two_organizations(client: AsyncClient, create_owner):
    """Partnership token accepted by another organization's owner"""
    first_headers, first_org = await create_owner("a@first.org", "First Pharmacy")
    second_headers, second_org = await create_owner("b@second.org", "Second Clinic")

    created = await client.post(
        "/api/organizations/partnerships",
        json={"partnership_type": "referral_network", "notes": "Shared patients"},
        headers=first_headers,
    )
    assert created.status_code == 201
    token = created.json()["partnership_token"]

    own = await client.post(
        "/api/partnerships/accept", json={"token": token}, headers=first_headers
    )
    assert own.status_code == 409

    accepted = await client.post(
        "/api/partnerships/accept", json={"token": token}, headers=second_headers
    )
    assert accepted.status_code == 200
    assert accepted.json()["initiator_org_id"] == first_org
    assert accepted.json()["status"] == "accepted"
    assert second_org != first_org


@pytest.mark.asyncio
async def test_create_organization_rejects_unknown_type(
    client: AsyncClient, register_user, create_profile
):
    _, headers = await register_user("x@example.com")
    await create_profile(headers, "x@example.com")

    response = await client.post(
        "/api/organizations",
        json={"name": "Nowhere", "type": "spaceport", "email": "x@example.com"},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ORGANIZATION_TYPE"
