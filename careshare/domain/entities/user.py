"""
User Entity

Identity record owned by the authentication provider.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class User(SQLModel, table=True):
    """
    User entity - the authenticated identity behind a profile.

    Business Rules:
    - Created by the authentication provider on signup
    - id is the subject of issued JWTs
    - Credentials live with the provider, never in this table
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
