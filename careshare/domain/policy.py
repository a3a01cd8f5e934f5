"""
Expiry & Single-Use Policy

One validity rule for every token-backed record:

    valid  <=>  (not used, or used less than `grace_window` ago)
                and expires_at > now

A record that is used but still inside its grace window is reported as
RECENTLY_USED so callers can tell a resubmission apart from first use.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


class TokenState(str, Enum):
    valid = "valid"
    recently_used = "recently_used"
    used = "used"
    expired = "expired"


@dataclass(frozen=True)
class TokenPolicy:
    """Lifetime and usage limits of one kind of token"""

    lifetime: timedelta
    grace_window: Optional[timedelta] = None
    max_attempts: Optional[int] = None
    max_issuances: Optional[int] = None
    issuance_window: Optional[timedelta] = None

    def expires_at(self, now: datetime) -> datetime:
        return now + self.lifetime

    def evaluate(
        self,
        *,
        is_used: bool,
        expires_at: datetime,
        now: datetime,
        used_at: Optional[datetime] = None,
    ) -> TokenState:
        """Classify a record against this policy at `now`"""
        recently_used = False
        if is_used:
            if not self.within_grace(used_at, now):
                return TokenState.used
            recently_used = True

        if expires_at <= now:
            return TokenState.expired

        return TokenState.recently_used if recently_used else TokenState.valid

    def within_grace(self, used_at: Optional[datetime], now: datetime) -> bool:
        if self.grace_window is None or used_at is None:
            return False
        return now - used_at < self.grace_window

    def attempts_exhausted(self, attempts: int) -> bool:
        return self.max_attempts is not None and attempts >= self.max_attempts

    def issuance_window_start(self, now: datetime) -> datetime:
        if self.issuance_window is None:
            raise ValueError("Policy has no issuance window")
        return now - self.issuance_window

    def issuance_limit_reached(self, issued_in_window: int) -> bool:
        return self.max_issuances is not None and issued_in_window >= self.max_issuances


INVITATION_POLICY = TokenPolicy(lifetime=timedelta(days=7))

PARTNERSHIP_POLICY = TokenPolicy(lifetime=timedelta(days=30))

PASSWORD_RESET_POLICY = TokenPolicy(
    lifetime=timedelta(hours=1),
    grace_window=timedelta(minutes=5),
)

OTP_POLICY = TokenPolicy(
    lifetime=timedelta(minutes=10),
    max_attempts=5,
    max_issuances=3,
    issuance_window=timedelta(minutes=5),
)


def is_valid(state: TokenState) -> bool:
    return state in (TokenState.valid, TokenState.recently_used)


def grant_is_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    """Access grants without a deadline never expire"""
    return expires_at is not None and expires_at < now
