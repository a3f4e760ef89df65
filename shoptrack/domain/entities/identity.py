"""
Identity Entity

Sign-in credentials for one human; the id is shared with UserProfile.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from shoptrack.domain.base import utcnow


class Identity(SQLModel, table=True):
    """
    Identity entity - what the session provider knows about a person.

    Business Rules:
    - Email must be unique across all identities
    - Password stored as bcrypt hash (cost factor 12)
    - user_metadata is free-form; authorization never reads it
    - Deleting an identity removes its profile
    """

    __tablename__ = "auth_identities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)

    user_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_sign_in_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
