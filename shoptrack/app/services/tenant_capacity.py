"""
Tenant Capacity

Decides whether a tenant may gain one more member, and admits members
under a row lock so concurrent admissions cannot overfill a tenant.
"""

import logging
from uuid import UUID

from pydantic import BaseModel

from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.entities import Tenant
from shoptrack.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class TenantCapacity(BaseModel):
    """Member count of a tenant against its limit"""

    can_add: bool
    current_count: int
    max_users: int


def tenant_not_found_error() -> Error:
    return Error("TENANT_NOT_FOUND", "Tenant not found")


def at_capacity_error(capacity: TenantCapacity) -> Error:
    return Error(
        "TENANT_AT_CAPACITY",
        f"Tenant is at capacity ({capacity.current_count}/{capacity.max_users} users)",
        details={"current_count": capacity.current_count, "max_users": capacity.max_users},
    )


async def measure_capacity(uow: UnitOfWork, tenant: Tenant) -> TenantCapacity:
    """Count every profile of the tenant regardless of status"""
    current_count = await uow.profiles.count_by_tenant(tenant.id)
    return TenantCapacity(
        can_add=current_count < tenant.max_users,
        current_count=current_count,
        max_users=tenant.max_users,
    )


async def reserve_seat(uow: UnitOfWork, tenant_id: UUID) -> Result[TenantCapacity]:
    """
    Lock the tenant row and recount its members.

    Must run inside the same open unit of work as the insert or update that
    adds the member, followed by commit; the lock is held until then.

    Returns:
        Result with the capacity observed under the lock, or
        TENANT_NOT_FOUND / TENANT_AT_CAPACITY
    """
    tenant = await uow.tenants.get_by_id(tenant_id, for_update=True)
    if tenant is None:
        return Return.err(tenant_not_found_error())

    capacity = await measure_capacity(uow, tenant)
    if not capacity.can_add:
        logger.warning(
            f"Admission refused for tenant {tenant_id}: "
            f"{capacity.current_count}/{capacity.max_users} users"
        )
        return Return.err(at_capacity_error(capacity))
    return Return.ok(capacity)
