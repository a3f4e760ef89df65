"""
Category Entity

Product grouping inside one tenant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from shoptrack.domain.base import utcnow


class Category(SQLModel, table=True):
    """
    Category entity.

    Business Rules:
    - name is unique within a tenant
    - Cannot be deleted while products reference it
    """

    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, ondelete="CASCADE")

    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_categories_tenant_name"),
        Index("idx_categories_tenant_id", "tenant_id"),
    )
