"""
Patient Entity

Patient record owned by one organization, shareable through a share token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class Patient(SQLModel, table=True):
    """
    Patient entity.

    Business Rules:
    - Owned by exactly one organization
    - share_token is the public locator other organizations use to
      request access; issuing a new one replaces the old one
    """

    __tablename__ = "patients"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(foreign_key="organizations.id", index=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)

    share_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=32
    )
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
