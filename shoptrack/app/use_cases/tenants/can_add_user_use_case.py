from uuid import UUID

from shoptrack.app.services.guards import translate_store_errors
from shoptrack.app.services.tenant_capacity import (
    TenantCapacity,
    measure_capacity,
    tenant_not_found_error,
)
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.libs.result import Result, Return


class CanAddUserUseCase:
    """
    Use case for checking whether a tenant may gain one more member.

    Business Rules:
    - current_count counts every profile of the tenant regardless of status
    - can_add = current_count < max_users
    - Tenants the caller cannot read are reported as TENANT_NOT_FOUND
    - Pure read; admission itself re-checks under a lock
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, tenant_id: UUID) -> Result[TenantCapacity]:
        async with self.uow:
            tenant = await self.uow.tenants.get_visible(caller, tenant_id)
            if tenant is None:
                return Return.err(tenant_not_found_error())
            return Return.ok(await measure_capacity(self.uow, tenant))
