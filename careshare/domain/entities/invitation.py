"""
MemberInvitation Entity

Invitations to join an organization.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import MemberRole


class MemberInvitation(SQLModel, table=True):
    """
    MemberInvitation entity - email-targeted invitation to join an organization.

    Business Rules:
    - Created by owner/admin
    - Expires after 7 days
    - Token is single-use, formatted XXXX-XXXX-XXXX-XXXX
    - Cancelling deactivates (is_active=False), never deletes
    """

    __tablename__ = "member_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)
    invited_by: UUID = Field(foreign_key="user_profiles.id")
    email: str = Field(max_length=255, nullable=False, index=True)

    role: MemberRole = Field(nullable=False)
    token: str = Field(unique=True, index=True, max_length=32)

    is_used: bool = Field(default=False)
    used_by: Optional[UUID] = Field(default=None, foreign_key="user_profiles.id")
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    is_active: bool = Field(default=True)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_expires_at", "expires_at"),
        Index("idx_invitation_org_email", "organization_id", "email"),
    )
