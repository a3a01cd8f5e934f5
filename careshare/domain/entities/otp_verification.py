"""
OTPVerification Entity

Six-digit one-time codes for signup verification.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class OTPVerification(SQLModel, table=True):
    """
    OTPVerification entity.

    Business Rules:
    - Expires after 10 minutes
    - At most 5 verification attempts, counted on the record itself
    - At most one live (unused) OTP per user
    - Records written before the rename hold the code in `code`; new
      records use `otp`. Read through stored_code only.
    """

    __tablename__ = "otp_verifications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    email: str = Field(max_length=255)

    otp: Optional[str] = Field(default=None, max_length=6)
    code: Optional[str] = Field(default=None, max_length=6)

    attempts: int = Field(default=0)
    is_used: bool = Field(default=False)
    is_verified: bool = Field(default=False)
    verified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_otp_user_used", "user_id", "is_used"),
        Index("idx_otp_created_at", "created_at"),
    )

    @property
    def stored_code(self) -> Optional[str]:
        return self.otp or self.code
