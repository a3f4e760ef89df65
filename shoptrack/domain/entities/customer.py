"""
Customer Entity

An end customer of one tenant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from shoptrack.domain.base import utcnow


class Customer(SQLModel, table=True):
    """
    Customer entity - always scoped to exactly one tenant.

    Business Rules:
    - tenant_id is set on insert and never changes
    - email, when present, is unique across all tenants
    """

    __tablename__ = "customers"

    id: Optional[int] = Field(default=None, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, ondelete="CASCADE")

    name: str = Field(max_length=255)
    email: Optional[str] = Field(default=None, unique=True, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_customers_tenant_id", "tenant_id"),
        Index("idx_customers_created_at", "created_at"),
    )
