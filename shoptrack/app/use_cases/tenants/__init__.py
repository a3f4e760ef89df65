"""
Tenant Management Use Cases

Tenant CRUD, capacity checks and self-service onboarding.
"""

from .can_add_user_use_case import CanAddUserUseCase
from .can_assign_to_tenant_use_case import CanAssignToTenantUseCase
from .create_tenant_use_case import CreateTenantUseCase
from .delete_tenant_use_case import DeleteTenantUseCase
from .dtos import (
    AssignmentCheck,
    CreateTenantCommand,
    DeleteTenantResponse,
    ListTenantsQuery,
    SetupTenantCommand,
    SetupTenantResponse,
    TenantOption,
    TenantResponse,
    TenantStatsResponse,
    UpdateTenantCommand,
)
from .get_tenant_use_case import GetTenantUseCase
from .list_tenants_use_case import ListTenantsUseCase
from .setup_tenant_use_case import SetupTenantUseCase
from .tenant_stats_use_case import TenantStatsUseCase
from .tenants_for_select_use_case import TenantsForSelectUseCase
from .update_tenant_settings_use_case import UpdateTenantSettingsUseCase
from .update_tenant_use_case import UpdateTenantUseCase

__all__ = [
    "CanAddUserUseCase",
    "CanAssignToTenantUseCase",
    "ListTenantsUseCase",
    "GetTenantUseCase",
    "TenantsForSelectUseCase",
    "CreateTenantUseCase",
    "UpdateTenantUseCase",
    "UpdateTenantSettingsUseCase",
    "DeleteTenantUseCase",
    "TenantStatsUseCase",
    "SetupTenantUseCase",
    "AssignmentCheck",
    "CreateTenantCommand",
    "UpdateTenantCommand",
    "SetupTenantCommand",
    "ListTenantsQuery",
    "TenantResponse",
    "TenantOption",
    "TenantStatsResponse",
    "SetupTenantResponse",
    "DeleteTenantResponse",
]
