from typing import Any, Dict
from uuid import UUID

from shoptrack.app.services.guards import not_found_error, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.policy import Resource, changed_values, check_update
from shoptrack.libs.result import Result, Return

from .dtos import TenantResponse


class UpdateTenantSettingsUseCase:
    """
    Use case for replacing a tenant's settings mapping.

    Business Rules:
    - super_admin only
    - The mapping is replaced as a whole
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, tenant_id: UUID, settings: Dict[str, Any]
    ) -> Result[TenantResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_visible(caller, tenant_id)
            if tenant is None:
                return Return.err(not_found_error("Tenant"))

            changes = changed_values(tenant, {"settings": settings})
            denial = check_update(caller, Resource.tenants, tenant, changes)
            if denial is not None:
                return Return.err(denial)

            tenant = await self.uow.tenants.update(caller, tenant, changes)
            await self.uow.commit()
            return Return.ok(TenantResponse.build(tenant))
