"""
UserProfile Entity

Application-level profile of an authenticated user.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import MANAGER_ROLES, MemberRole


class UserProfile(SQLModel, table=True):
    """
    UserProfile entity - names, organization membership and onboarding flags.

    Business Rules:
    - Exactly one profile per user_id
    - Email is unique and stored lower-cased
    - Belongs to at most one organization at a time
    - Never hard-deleted (is_active is the soft switch)
    - requires_otp_verification is tri-state: None marks a profile created
      before OTP verification existed (legacy, exempt)
    """

    __tablename__ = "user_profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    email: str = Field(unique=True, index=True, max_length=255)

    organization_id: Optional[UUID] = Field(
        default=None, foreign_key="organizations.id", index=True
    )
    role: Optional[MemberRole] = Field(default=None)

    profile_completed: bool = Field(default=False)
    setup_completed: bool = Field(default=False)
    requires_otp_verification: Optional[bool] = Field(default=None)
    welcome_email_sent: bool = Field(default=False)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_profile_org_active", "organization_id", "is_active"),)

    @property
    def requires_otp(self) -> bool:
        """Only an explicit True requires OTP; False and legacy None are exempt"""
        return self.requires_otp_verification is True

    @property
    def is_manager(self) -> bool:
        return self.organization_id is not None and self.role in MANAGER_ROLES

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
