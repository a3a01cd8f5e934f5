import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_password_reset_flow(
    client: AsyncClient, dispatcher, register_user, create_profile
):
    """Request, verify and complete a password reset

    Given a user with a profile
    When they request a reset and submit the emailed token
    Then the token verifies and the reset completes
    And a double submission right after completing still succeeds
    """
    _, headers = await register_user("reset@example.com")
    await create_profile(headers, "reset@example.com")

    requested = await client.post(
        "/api/password-reset/request", json={"email": "Reset@Example.com"}
    )
    assert requested.status_code == 200
    assert requested.json()["status"] == "sent"
    token = dispatcher.last("password_reset")["reset_token"]

    verified = await client.get("/api/password-reset/verify", params={"token": token})
    assert verified.status_code == 200
    assert verified.json()["valid"] is True
    assert verified.json()["email"] == "reset@example.com"

    completed = await client.post(
        "/api/password-reset/complete",
        json={"token": token, "new_password": "a-much-better-secret"},
    )
    assert completed.status_code == 200
    assert completed.json()["status"] == "success"
    assert completed.json()["email"] == "reset@example.com"

    resubmitted = await client.post(
        "/api/password-reset/complete",
        json={"token": token, "new_password": "a-much-better-secret"},
    )
    assert resubmitted.status_code == 200


@pytest.mark.asyncio
async def test_password_reset_request_for_unknown_email_looks_the_same(
    client: AsyncClient, dispatcher
):
    response = await client.post(
        "/api/password-reset/request", json={"email": "nobody@example.com"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "sent"
    assert dispatcher.jobs == []


@pytest.mark.asyncio
async def test_newer_reset_request_invalidates_older_token(
    client: AsyncClient, dispatcher, register_user, create_profile
):
    _, headers = await register_user("twice@example.com")
    await create_profile(headers, "twice@example.com")

    await client.post("/api/password-reset/request", json={"email": "twice@example.com"})
    first_token = dispatcher.last("password_reset")["reset_token"]
    await client.post("/api/password-reset/request", json={"email": "twice@example.com"})
    second_token = dispatcher.last("password_reset")["reset_token"]

    assert first_token != second_token
    response = await client.post(
        "/api/password-reset/complete",
        json={"token": first_token, "new_password": "long-enough-pass"},
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_USED"


@pytest.mark.asyncio
async def test_short_password_is_rejected(
    client: AsyncClient, dispatcher, register_user, create_profile
):
    _, headers = await register_user("short@example.com")
    await create_profile(headers, "short@example.com")
    await client.post("/api/password-reset/request", json={"email": "short@example.com"})
    token = dispatcher.last("password_reset")["reset_token"]

    response = await client.post(
        "/api/password-reset/complete", json={"token": token, "new_password": "short"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PASSWORD"


@pytest.mark.asyncio
async def test_verify_reports_issued_token_state(
    client: AsyncClient, dispatcher, register_user, create_profile
):
    """Verify reads the stored token before and after it is used

    Given an issued reset token
    When it is verified, completed, then verified again
    Then it is valid first and valid with recently_used inside the grace window
    """
    _, headers = await register_user("verify@example.com")
    await create_profile(headers, "verify@example.com")
    await client.post("/api/password-reset/request", json={"email": "verify@example.com"})
    token = dispatcher.last("password_reset")["reset_token"]

    before = await client.get("/api/password-reset/verify", params={"token": token})
    assert before.status_code == 200
    assert before.json() == {
        "valid": True,
        "email": "verify@example.com",
        "recently_used": False,
        "error": None,
    }

    await client.post(
        "/api/password-reset/complete",
        json={"token": token, "new_password": "fresh-password-1"},
    )

    after = await client.get("/api/password-reset/verify", params={"token": token})
    assert after.status_code == 200
    assert after.json()["valid"] is True
    assert after.json()["recently_used"] is True


@pytest.mark.asyncio
async def test_verify_unknown_token_is_invalid(client: AsyncClient):
    response = await client.get("/api/password-reset/verify", params={"token": "missing"})

    assert response.status_code == 200
    assert response.json()["valid"] is False
    assert response.json()["error"] == "Invalid reset token"
