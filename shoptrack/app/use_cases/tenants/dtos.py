"""
Tenant Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the tenants domain.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shoptrack.app.services.tenant_capacity import TenantCapacity
from shoptrack.app.use_cases.users.dtos import UserResponse
from shoptrack.domain.entities import Tenant, TenantStatus


# ============================================================================
# Command DTOs
# ============================================================================


class CreateTenantCommand(BaseModel):
    """Create tenant command"""

    name: str
    address: Optional[str] = None
    contact_info: Optional[str] = None
    status: TenantStatus = TenantStatus.active
    subscription_plan: str = "basic"
    max_users: int = 10
    settings: Dict[str, Any] = Field(default_factory=dict)


class UpdateTenantCommand(BaseModel):
    """
    Update tenant command

    Only fields explicitly set are applied.
    """

    name: Optional[str] = None
    address: Optional[str] = None
    contact_info: Optional[str] = None
    status: Optional[TenantStatus] = None
    subscription_plan: Optional[str] = None
    max_users: Optional[int] = None
    settings: Optional[Dict[str, Any]] = None


class SetupTenantCommand(BaseModel):
    """Self-service onboarding: the business the caller is setting up"""

    name: str
    address: Optional[str] = None
    contact_info: Optional[str] = None


class ListTenantsQuery(BaseModel):
    """Filters for listing tenants"""

    status: Optional[TenantStatus] = None
    search: Optional[str] = None
    limit: Optional[int] = None
    offset: int = 0


# ============================================================================
# Response DTOs
# ============================================================================


class TenantResponse(BaseModel):
    """Tenant with member counts"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    address: Optional[str] = None
    contact_info: Optional[str] = None
    status: TenantStatus
    subscription_plan: str
    max_users: int
    settings: Dict[str, Any] = Field(default_factory=dict)
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime
    user_count: int = 0
    active_users: int = 0

    @classmethod
    def build(cls, tenant: Tenant, user_count: int = 0, active_users: int = 0) -> "TenantResponse":
        response = cls.model_validate(tenant)
        response.user_count = user_count
        response.active_users = active_users
        return response


class TenantOption(BaseModel):
    """Tenant entry for selection lists"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class TenantStatsResponse(BaseModel):
    """Tenant counts per status"""

    total_tenants: int
    active_tenants: int
    inactive_tenants: int
    suspended_tenants: int


class AssignmentCheck(BaseModel):
    """Outcome of checking a user can move into a tenant"""

    can_assign: bool
    already_assigned: bool = False
    capacity: Optional[TenantCapacity] = None


class SetupTenantResponse(BaseModel):
    """Response for self-service tenant setup"""

    tenant: TenantResponse
    user: UserResponse


class DeleteTenantResponse(BaseModel):
    """Response for delete tenant use case"""

    status: str
    message: str
    detached_users: int
