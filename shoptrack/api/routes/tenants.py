from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from shoptrack.api.error import raise_for_error
from shoptrack.app.services.tenant_capacity import TenantCapacity
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.app.use_cases.tenants import (
    CanAddUserUseCase,
    CreateTenantCommand,
    CreateTenantUseCase,
    DeleteTenantResponse,
    DeleteTenantUseCase,
    GetTenantUseCase,
    ListTenantsQuery,
    ListTenantsUseCase,
    TenantOption,
    TenantResponse,
    TenantsForSelectUseCase,
    TenantStatsResponse,
    TenantStatsUseCase,
    UpdateTenantCommand,
    UpdateTenantSettingsUseCase,
    UpdateTenantUseCase,
)
from shoptrack.depends import get_caller, get_unit_of_work
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import TenantStatus

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[TenantResponse])
async def list_tenants(
    status_filter: Optional[TenantStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Matches name or address"),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Tenants

    super_admin sees all tenants; everyone else only their own.
    """
    query = ListTenantsQuery(status=status_filter, search=search, limit=limit, offset=offset)

    use_case = ListTenantsUseCase(uow)
    result = await use_case.execute(caller, query)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/select", status_code=status.HTTP_200_OK, response_model=List[TenantOption])
async def tenants_for_select(
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Active tenants ordered by name"""
    use_case = TenantsForSelectUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=TenantStatsResponse)
async def tenant_stats(
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Tenant counts per status"""
    use_case = TenantStatsUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{tenant_id}", status_code=status.HTTP_200_OK, response_model=TenantResponse)
async def get_tenant(
    tenant_id: UUID,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Tenant

    Raises:
        - 404 Not Found: NOT_FOUND (absent or not visible)
    """
    use_case = GetTenantUseCase(uow)
    result = await use_case.execute(caller, tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{tenant_id}/capacity", status_code=status.HTTP_200_OK, response_model=TenantCapacity
)
async def tenant_capacity(
    tenant_id: UUID,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Can Add User

    Reports whether the tenant has room for one more member.

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
    """
    use_case = CanAddUserUseCase(uow)
    result = await use_case.execute(caller, tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class CreateTenantRequest(BaseModel):
    """Create tenant HTTP request payload"""

    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = None
    contact_info: Optional[str] = None
    status: TenantStatus = TenantStatus.active
    subscription_plan: str = Field("basic", max_length=50)
    max_users: int = Field(10, ge=1)
    settings: Dict[str, Any] = Field(default_factory=dict)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TenantResponse)
async def create_tenant(
    request: CreateTenantRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Tenant

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE (super_admin only)
        - 422 Unprocessable Entity: VALIDATION_FAILED
    """
    use_case = CreateTenantUseCase(uow)
    result = await use_case.execute(caller, CreateTenantCommand(**request.model_dump()))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateTenantRequest(BaseModel):
    """Update tenant HTTP request payload; omitted fields are left unchanged"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = None
    contact_info: Optional[str] = None
    status: Optional[TenantStatus] = None
    subscription_plan: Optional[str] = Field(None, max_length=50)
    max_users: Optional[int] = Field(None, ge=1)
    settings: Optional[Dict[str, Any]] = None


@router.patch("/{tenant_id}", status_code=status.HTTP_200_OK, response_model=TenantResponse)
async def update_tenant(
    tenant_id: UUID,
    request: UpdateTenantRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Tenant

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE (super_admin only)
        - 404 Not Found: NOT_FOUND
    """
    command = UpdateTenantCommand(**request.model_dump(exclude_unset=True))

    use_case = UpdateTenantUseCase(uow)
    result = await use_case.execute(caller, tenant_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class TenantSettingsRequest(BaseModel):
    """Replacement settings mapping"""

    settings: Dict[str, Any]


@router.put(
    "/{tenant_id}/settings", status_code=status.HTTP_200_OK, response_model=TenantResponse
)
async def update_tenant_settings(
    tenant_id: UUID,
    request: TenantSettingsRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Replace Tenant Settings

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE (super_admin only)
        - 404 Not Found: NOT_FOUND
    """
    use_case = UpdateTenantSettingsUseCase(uow)
    result = await use_case.execute(caller, tenant_id, request.settings)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{tenant_id}", status_code=status.HTTP_200_OK, response_model=DeleteTenantResponse
)
async def delete_tenant(
    tenant_id: UUID,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Tenant

    Deletes the tenant's customers, products and categories and detaches
    its members.

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE (super_admin only)
        - 404 Not Found: NOT_FOUND
    """
    use_case = DeleteTenantUseCase(uow)
    result = await use_case.execute(caller, tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
