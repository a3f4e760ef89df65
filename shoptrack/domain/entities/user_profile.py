"""
UserProfile Entity

Role and tenant assignment of one identity.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlmodel import JSON, Column, DateTime, Field, Index, Relationship, SQLModel

from shoptrack.domain.base import utcnow

from .enums import UserRole, UserStatus

if TYPE_CHECKING:
    from .tenant import Tenant


class UserProfile(SQLModel, table=True):
    """
    UserProfile entity - the authorization record of a user.

    Business Rules:
    - id equals the Identity id
    - tenant_admin and tenant_user must reference a tenant
    - super_admin conventionally has no tenant
    - Nobody changes their own role or status
    """

    __tablename__ = "user_profiles"

    id: UUID = Field(foreign_key="auth_identities.id", primary_key=True, ondelete="CASCADE")
    email: str = Field(unique=True, index=True, max_length=255)

    role: UserRole = Field(default=UserRole.tenant_user)
    tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id", ondelete="SET NULL")

    full_name: Optional[str] = Field(default=None, max_length=255)
    status: UserStatus = Field(default=UserStatus.active)
    last_login: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    permissions: dict = Field(default_factory=dict, sa_column=Column(JSON))
    created_by: Optional[UUID] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    tenant: Optional["Tenant"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})

    __table_args__ = (
        Index("idx_user_profiles_role", "role"),
        Index("idx_user_profiles_tenant_id", "tenant_id"),
        Index("idx_user_profiles_status", "status"),
        Index("idx_user_profiles_created_at", "created_at"),
    )
