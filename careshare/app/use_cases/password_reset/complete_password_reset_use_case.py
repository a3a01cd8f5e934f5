"""
Complete Password Reset Use Case

Handles the new-password submission for a reset token.
"""

from typing import Optional

import bcrypt

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.domain.entities import AuditEvent
from careshare.domain.policy import PASSWORD_RESET_POLICY, TokenState
from careshare.libs.result import Error, Result, Return

from .dtos import CompletePasswordResetResponse

MIN_PASSWORD_LENGTH = 8


class CompletePasswordResetUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - New password must be at least 8 characters
    - Token must exist and not be expired
    - A used token is accepted again within 5 minutes of first use
      (page refresh / double submit); used_at keeps the first use
    - Profile and identity are resolved by the token's email
    - The new password is kept on the reset record as a bcrypt hash (cost
      factor 12) for audit; rotating the credential is the identity
      provider's step
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    def _validate_password(self, password: str) -> Result[None]:
        if len(password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                )
            )
        return Return.ok(None)

    async def execute(
        self, token: str, new_password: str
    ) -> Result[CompletePasswordResetResponse]:
        """
        Execute complete password reset use case.

        Args:
            token: Password reset token from the email link
            new_password: New password

        Returns:
            Result with CompletePasswordResetResponse, or Error

        Errors:
            - INVALID_PASSWORD: Password does not meet requirements
            - NOT_FOUND: Unknown token, or no profile/identity for its email
            - ALREADY_USED: Used more than 5 minutes ago
            - EXPIRED: Past its 1-hour deadline
        """
        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.get_by_token(token.strip())
            if reset_token is None:
                return Return.err(Error("NOT_FOUND", "Invalid reset token"))

            now = self.clock.now()
            state = PASSWORD_RESET_POLICY.evaluate(
                is_used=reset_token.is_used,
                used_at=reset_token.used_at,
                expires_at=reset_token.expires_at,
                now=now,
            )
            if state == TokenState.used:
                return Return.err(
                    Error("ALREADY_USED", "Reset token has already been used")
                )
            if state == TokenState.expired:
                return Return.err(
                    Error(
                        "EXPIRED",
                        "Reset token has expired. Please request a new password reset.",
                    )
                )

            profile = await self.uow.profiles.get_by_email(reset_token.email)
            if profile is None:
                return Return.err(
                    Error("NOT_FOUND", "User profile not found for this email address")
                )

            user = await self.uow.users.get_by_id(profile.user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User account not found"))

            reset_token.new_password_hash = bcrypt.hashpw(
                new_password.encode("utf-8"), bcrypt.gensalt(rounds=12)
            ).decode("utf-8")
            if state == TokenState.valid:
                reset_token.is_used = True
                reset_token.used_at = now
            await self.uow.password_reset_tokens.update(reset_token)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=None,
                    user_id=user.id,
                    action="password_reset_completed",
                    event_metadata={
                        "token_id": str(reset_token.id),
                        "resubmission": state == TokenState.recently_used,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(
                CompletePasswordResetResponse(
                    status="success",
                    email=reset_token.email,
                    message=(
                        "Password reset request has been processed successfully. "
                        "Please sign in with your new password."
                    ),
                )
            )
