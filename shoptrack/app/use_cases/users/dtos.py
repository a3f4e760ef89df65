"""
User Use Case DTOs (Data Transfer Objects)

Command and Response classes for the users domain.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shoptrack.domain.entities import Tenant, TenantStatus, UserProfile, UserRole, UserStatus


# ============================================================================
# Command DTOs
# ============================================================================


class CreateUserCommand(BaseModel):
    """Create user command - validated intent to add a user account"""

    email: str
    password: str
    full_name: Optional[str] = None
    role: UserRole = UserRole.tenant_user
    tenant_id: Optional[UUID] = None
    status: UserStatus = UserStatus.active


class UpdateUserCommand(BaseModel):
    """
    Update user command

    Only fields explicitly set are applied (``model_dump(exclude_unset=True)``).
    """

    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    tenant_id: Optional[UUID] = None
    permissions: Optional[Dict[str, Any]] = None


class ListUsersQuery(BaseModel):
    """Filters for listing users"""

    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    tenant_id: Optional[UUID] = None
    search: Optional[str] = None
    exclude_self: bool = False
    limit: Optional[int] = None
    offset: int = 0


# ============================================================================
# Response DTOs
# ============================================================================


class TenantSummary(BaseModel):
    """Tenant shown inline with a user"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    status: TenantStatus
    subscription_plan: str


class UserResponse(BaseModel):
    """User profile with its tenant inline"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    role: UserRole
    tenant_id: Optional[UUID] = None
    full_name: Optional[str] = None
    status: UserStatus
    last_login: Optional[datetime] = None
    permissions: Dict[str, Any] = Field(default_factory=dict)
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime
    tenant: Optional[TenantSummary] = None

    @classmethod
    def build(cls, profile: UserProfile, tenant: Optional[Tenant] = None) -> "UserResponse":
        """Build from a profile; the tenant is passed in, never lazy-loaded"""
        return cls(
            id=profile.id,
            email=profile.email,
            role=profile.role,
            tenant_id=profile.tenant_id,
            full_name=profile.full_name,
            status=profile.status,
            last_login=profile.last_login,
            permissions=profile.permissions or {},
            created_by=profile.created_by,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
            tenant=TenantSummary.model_validate(tenant) if tenant is not None else None,
        )


class UserStatsResponse(BaseModel):
    """Counts over the users visible to the caller"""

    total_users: int
    super_admins: int
    tenant_admins: int
    tenant_users: int
    active_users: int
    inactive_users: int
    suspended_users: int
    recent_logins: int


class DeleteUserResponse(BaseModel):
    """Response for delete user use case"""

    status: str
    message: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    status: str
    message: str
