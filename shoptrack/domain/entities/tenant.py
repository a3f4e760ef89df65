"""
Tenant Entity

One business; the unit of data isolation.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from shoptrack.domain.base import utcnow

from .enums import TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolated business account.

    Business Rules:
    - max_users >= 1 (default 10)
    - Deleting a tenant removes its customers, products and categories
    - Member profiles are detached on deletion, never deleted
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    address: Optional[str] = Field(default=None)
    contact_info: Optional[str] = Field(default=None)

    status: TenantStatus = Field(default=TenantStatus.active)
    subscription_plan: str = Field(default="basic", max_length=50)
    max_users: int = Field(default=10)
    settings: dict = Field(default_factory=dict, sa_column=Column(JSON))

    created_by: Optional[UUID] = Field(
        default=None, foreign_key="auth_identities.id", ondelete="SET NULL"
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        CheckConstraint("max_users >= 1", name="ck_tenants_max_users_positive"),
        Index("idx_tenants_status", "status"),
        Index("idx_tenants_created_at", "created_at"),
    )
