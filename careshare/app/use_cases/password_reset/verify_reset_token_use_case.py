"""
Verify Reset Token Use Case

Read-only check the UI runs before showing the new-password form.
"""

from typing import Optional

from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.domain.policy import PASSWORD_RESET_POLICY, TokenState
from careshare.libs.result import Result, Return

from .dtos import VerifyResetTokenResponse


class VerifyResetTokenUseCase:
    """
    Use case for checking a reset token without consuming it.

    Never fails: unknown, expired and used tokens come back as
    valid=False with a reason. A token used inside the grace window is
    valid with recently_used=True.
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[IClock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, token: str) -> Result[VerifyResetTokenResponse]:
        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.get_by_token(token.strip())
            if reset_token is None:
                return Return.ok(
                    VerifyResetTokenResponse(valid=False, error="Invalid reset token")
                )

            state = PASSWORD_RESET_POLICY.evaluate(
                is_used=reset_token.is_used,
                used_at=reset_token.used_at,
                expires_at=reset_token.expires_at,
                now=self.clock.now(),
            )
            if state == TokenState.expired:
                return Return.ok(
                    VerifyResetTokenResponse(valid=False, error="Reset token has expired")
                )
            if state == TokenState.used:
                return Return.ok(
                    VerifyResetTokenResponse(
                        valid=False, error="Reset token has already been used"
                    )
                )

            return Return.ok(
                VerifyResetTokenResponse(
                    valid=True,
                    email=reset_token.email,
                    recently_used=state == TokenState.recently_used,
                )
            )
