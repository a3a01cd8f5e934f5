"""
Organization Entity

A healthcare entity (pharmacy, clinic, hospital, aged care facility).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import OrganizationType


class Organization(SQLModel, table=True):
    """
    Organization entity.

    Business Rules:
    - Created once per owning user; the creator becomes owner
    - owner_id is a weak back-reference to the founding profile
    """

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    name: str = Field(max_length=255)
    type: OrganizationType = Field(nullable=False)
    email: str = Field(max_length=255)
    phone_number: Optional[str] = Field(default=None, max_length=50)

    owner_id: UUID = Field(index=True)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
