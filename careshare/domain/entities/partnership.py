"""
OrganizationPartnership Entity
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import PartnershipStatus, PartnershipType


class OrganizationPartnership(SQLModel, table=True):
    """
    OrganizationPartnership entity - org-to-org token, valid for 30 days.

    Business Rules:
    - Created by owner/admin of the initiating organization
    - Token formatted XXXXX-XXXXX-XXXXX-XXXXX
    - Accepted at most once, by a different organization
    """

    __tablename__ = "organization_partnerships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    initiator_org_id: UUID = Field(foreign_key="organizations.id", index=True)
    partner_org_id: Optional[UUID] = Field(default=None, foreign_key="organizations.id")
    partnership_token: str = Field(unique=True, index=True, max_length=32)
    partnership_type: PartnershipType = Field(nullable=False)
    status: PartnershipStatus = Field(default=PartnershipStatus.pending)
    notes: Optional[str] = Field(default=None, max_length=1000)

    initiated_by: UUID = Field(foreign_key="user_profiles.id")
    accepted_by: Optional[UUID] = Field(default=None, foreign_key="user_profiles.id")
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    is_active: bool = Field(default=True)

    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
