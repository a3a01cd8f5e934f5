"""
TokenAccessGrant Entity

Cross-organization access to a single patient record.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import AccessGrantStatus


class TokenAccessGrant(SQLModel, table=True):
    """
    TokenAccessGrant entity - a user outside the owning organization asking
    for, and possibly receiving, access to one patient.

    Business Rules:
    - Lifecycle: pending -> approved -> revoked, or pending -> denied
    - Nothing ever returns to pending
    - expires_at None means the grant never expires
    - Expiry is evaluated when read, never stored as a status
    - At most one pending or approved-unexpired grant per (patient, requester)
    """

    __tablename__ = "token_access_grants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    patient_id: UUID = Field(foreign_key="patients.id", index=True)
    share_token: str = Field(max_length=32)

    requested_by_user_id: UUID = Field(foreign_key="users.id", index=True)
    requested_by_org_id: Optional[UUID] = Field(default=None)
    granted_to_user_id: UUID = Field(foreign_key="users.id")
    granted_to_org_id: Optional[UUID] = Field(default=None)
    granted_by_user_id: Optional[UUID] = Field(default=None)
    revoked_by_user_id: Optional[UUID] = Field(default=None)

    status: AccessGrantStatus = Field(default=AccessGrantStatus.pending)
    permissions: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    is_active: bool = Field(default=True)

    # Transition timestamps
    requested_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    granted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    denied_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_grant_patient_requester", "patient_id", "requested_by_user_id"),
        Index("idx_grant_status", "status"),
    )
