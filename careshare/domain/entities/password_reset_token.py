"""
PasswordResetToken Entity

Secure password reset tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - secure password reset tokens.

    Business Rules:
    - Scoped to an email, not a user id, so nothing is resolved before use
    - Expires after 1 hour
    - Single-use, but a used token stays acceptable for 5 minutes after
      used_at so a refreshed or resubmitted form still works
    - At most one live token per email (older ones are marked used)
    - new_password_hash keeps the submitted credential (bcrypt) as audit trail
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(max_length=255, index=True)
    token: str = Field(unique=True, index=True, max_length=32)

    is_used: bool = Field(default=False)
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    new_password_hash: Optional[str] = Field(default=None, max_length=60)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_password_reset_expires_at", "expires_at"),
        Index("idx_password_reset_email_used", "email", "is_used"),
    )
