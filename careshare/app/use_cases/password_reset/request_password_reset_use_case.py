"""
Request Password Reset Use Case

Handles generating and sending password reset tokens.
"""

from typing import Optional

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.notification_dispatcher import (
    INotificationDispatcher,
    NotificationKind,
)
from careshare.app.services.token_issuer import DEFAULT_MAX_ATTEMPTS, issue_unique_token
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import normalize_email, schedule_quietly
from careshare.domain.entities import AuditEvent, PasswordResetToken
from careshare.domain.policy import PASSWORD_RESET_POLICY
from careshare.domain.tokens import generate_reset_token
from careshare.libs.result import Result, Return

from .dtos import RequestPasswordResetResponse

GENERIC_RESPONSE = RequestPasswordResetResponse(
    status="sent",
    message="If the email exists, a password reset link has been sent",
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Email is normalised (trimmed, lower-cased)
    - No email enumeration (same response for known and unknown emails,
      including when the token cannot be issued)
    - Every unused token for the email is invalidated first, so at most
      one token per email is live
    - 32-character token, expires in 1 hour
    - Reset email is scheduled after commit; scheduling failures are logged
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotificationDispatcher,
        clock: Optional[IClock] = None,
        max_token_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.uow = uow
        self.notifier = notifier
        self.clock = clock or SystemClock()
        self.max_token_attempts = max_token_attempts

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Email address as typed by the user

        Returns:
            Result with the generic "sent" response
        """
        email = normalize_email(email)

        async with self.uow:
            profile = await self.uow.profiles.get_by_email(email)
            if profile is None:
                return Return.ok(GENERIC_RESPONSE)

            for previous in await self.uow.password_reset_tokens.list_unused_by_email(email):
                previous.is_used = True
                await self.uow.password_reset_tokens.update(previous)

            async def token_taken(candidate: str) -> bool:
                return await self.uow.password_reset_tokens.get_by_token(candidate) is not None

            token_result = await issue_unique_token(
                generate_reset_token, token_taken, self.max_token_attempts
            )
            if token_result.is_err():
                return Return.ok(GENERIC_RESPONSE)

            now = self.clock.now()
            reset_token = PasswordResetToken(
                email=email,
                token=token_result.value,
                expires_at=PASSWORD_RESET_POLICY.expires_at(now),
                created_at=now,
            )
            await self.uow.password_reset_tokens.create(reset_token)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=None,  # No organization context for password reset
                    user_id=profile.user_id,
                    action="password_reset_requested",
                    event_metadata={"token_id": str(reset_token.id)},
                )
            )

            await self.uow.commit()

            await schedule_quietly(
                self.notifier,
                NotificationKind.PASSWORD_RESET,
                {"user_email": email, "reset_token": reset_token.token},
            )

        return Return.ok(GENERIC_RESPONSE)
