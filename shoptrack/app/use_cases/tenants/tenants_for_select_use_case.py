from typing import List

from shoptrack.app.services.guards import translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.libs.result import Result, Return

from .dtos import TenantOption


class TenantsForSelectUseCase:
    """Active tenants visible to the caller, ordered by name"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext) -> Result[List[TenantOption]]:
        async with self.uow:
            tenants = await self.uow.tenants.list_active_for_select(caller)
            return Return.ok([TenantOption.model_validate(tenant) for tenant in tenants])
