import re
from datetime import timedelta
from uuid import uuid4

import bcrypt
import pytest

from careshare.app.use_cases.password_reset import (
    CompletePasswordResetUseCase,
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
)
from careshare.domain.entities import PasswordResetToken, User


@pytest.fixture
def reset_token(now):
    return PasswordResetToken(
        email="owner@sunrise.example",
        token="a" * 32,
        expires_at=now + timedelta(minutes=50),
        created_at=now - timedelta(minutes=10),
    )


@pytest.fixture
def account(mock_uow, owner_profile):
    mock_uow.profiles.get_by_email.return_value = owner_profile
    mock_uow.users.get_by_id.return_value = User(
        id=owner_profile.user_id, email=owner_profile.email
    )
    return owner_profile


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_request_issues_token_and_schedules_email(
    mock_uow, notifier, clock, now, account
):
    result = await RequestPasswordResetUseCase(mock_uow, notifier, clock).execute(
        " Owner@Sunrise.example "
    )

    assert result.is_ok()
    assert result.value.status == "sent"

    token = mock_uow.password_reset_tokens.create.call_args[0][0]
    assert token.email == "owner@sunrise.example"
    assert re.fullmatch(r"[A-Za-z0-9]{32}", token.token)
    assert token.expires_at == now + timedelta(hours=1)

    notifier.schedule.assert_awaited_once_with(
        "password_reset",
        {"user_email": "owner@sunrise.example", "reset_token": token.token},
    )


@pytest.mark.asyncio
async def test_request_for_unknown_email_looks_the_same(mock_uow, notifier, clock, account):
    known = await RequestPasswordResetUseCase(mock_uow, notifier, clock).execute(
        "owner@sunrise.example"
    )

    mock_uow.profiles.get_by_email.return_value = None
    unknown = await RequestPasswordResetUseCase(mock_uow, notifier, clock).execute(
        "ghost@example.com"
    )

    assert unknown.is_ok()
    assert unknown.value == known.value
    assert mock_uow.password_reset_tokens.create.await_count == 1
    assert notifier.schedule.await_count == 1


@pytest.mark.asyncio
async def test_request_invalidates_previous_tokens(
    mock_uow, notifier, clock, account, reset_token
):
    mock_uow.password_reset_tokens.list_unused_by_email.return_value = [reset_token]

    await RequestPasswordResetUseCase(mock_uow, notifier, clock).execute("owner@sunrise.example")

    assert reset_token.is_used is True
    mock_uow.password_reset_tokens.update.assert_any_await(reset_token)


# ---------------------------------------------------------------------------
# Verify
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_verify_valid_token(mock_uow, clock, reset_token):
    mock_uow.password_reset_tokens.get_by_token.return_value = reset_token

    result = await VerifyResetTokenUseCase(mock_uow, clock).execute(reset_token.token)

    assert result.value.valid is True
    assert result.value.email == reset_token.email
    assert result.value.recently_used is False


@pytest.mark.asyncio
async def test_verify_recently_used_token(mock_uow, clock, now, reset_token):
    reset_token.is_used = True
    reset_token.used_at = now - timedelta(minutes=2)
    mock_uow.password_reset_tokens.get_by_token.return_value = reset_token

    result = await VerifyResetTokenUseCase(mock_uow, clock).execute(reset_token.token)

    assert result.value.valid is True
    assert result.value.recently_used is True


@pytest.mark.asyncio
async def test_verify_unknown_and_expired_tokens(mock_uow, clock, now, reset_token):
    unknown = await VerifyResetTokenUseCase(mock_uow, clock).execute("nope")
    assert unknown.value.valid is False

    reset_token.expires_at = now - timedelta(seconds=1)
    mock_uow.password_reset_tokens.get_by_token.return_value = reset_token
    expired = await VerifyResetTokenUseCase(mock_uow, clock).execute(reset_token.token)
    assert expired.value.valid is False
    assert "expired" in expired.value.error


# ---------------------------------------------------------------------------
# Complete
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_complete_reset(mock_uow, clock, now, account, reset_token):
    mock_uow.password_reset_tokens.get_by_token.return_value = reset_token

    result = await CompletePasswordResetUseCase(mock_uow, clock).execute(
        reset_token.token, "NewSecurePass1"
    )

    assert result.is_ok()
    assert result.value.status == "success"
    assert reset_token.is_used is True
    assert reset_token.used_at == now
    assert bcrypt.checkpw(b"NewSecurePass1", reset_token.new_password_hash.encode("utf-8"))
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_resubmission_within_grace_window(mock_uow, clock, now, account, reset_token):
    first_use = now - timedelta(minutes=4)
    reset_token.is_used = True
    reset_token.used_at = first_use
    mock_uow.password_reset_tokens.get_by_token.return_value = reset_token

    result = await CompletePasswordResetUseCase(mock_uow, clock).execute(
        reset_token.token, "NewSecurePass1"
    )

    assert result.is_ok()
    assert reset_token.used_at == first_use


@pytest.mark.asyncio
async def test_resubmission_after_grace_window(mock_uow, clock, now, account, reset_token):
    reset_token.is_used = True
    reset_token.used_at = now - timedelta(minutes=6)
    mock_uow.password_reset_tokens.get_by_token.return_value = reset_token

    result = await CompletePasswordResetUseCase(mock_uow, clock).execute(
        reset_token.token, "NewSecurePass1"
    )

    assert result.is_err()
    assert result.error.code == "ALREADY_USED"


@pytest.mark.asyncio
async def test_complete_with_expired_token(mock_uow, clock, now, account, reset_token):
    reset_token.expires_at = now - timedelta(minutes=1)
    mock_uow.password_reset_tokens.get_by_token.return_value = reset_token

    result = await CompletePasswordResetUseCase(mock_uow, clock).execute(
        reset_token.token, "NewSecurePass1"
    )

    assert result.error.code == "EXPIRED"
    assert reset_token.is_used is False


@pytest.mark.asyncio
async def test_complete_rejects_short_password(mock_uow, clock, reset_token):
    mock_uow.password_reset_tokens.get_by_token.return_value = reset_token

    result = await CompletePasswordResetUseCase(mock_uow, clock).execute(
        reset_token.token, "short"
    )

    assert result.error.code == "INVALID_PASSWORD"
    mock_uow.password_reset_tokens.get_by_token.assert_not_called()


@pytest.mark.asyncio
async def test_complete_with_unknown_token(mock_uow, clock):
    result = await CompletePasswordResetUseCase(mock_uow, clock).execute(
        "missing", "NewSecurePass1"
    )

    assert result.error.code == "NOT_FOUND"


@pytest.mark.asyncio
async def test_complete_without_account(mock_uow, clock, reset_token):
    mock_uow.password_reset_tokens.get_by_token.return_value = reset_token

    result = await CompletePasswordResetUseCase(mock_uow, clock).execute(
        reset_token.token, "NewSecurePass1"
    )

    assert result.error.code == "NOT_FOUND"
    assert reset_token.is_used is False
