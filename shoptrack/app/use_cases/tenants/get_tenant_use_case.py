from uuid import UUID

from shoptrack.app.services.guards import not_found_error, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserStatus
from shoptrack.libs.result import Result, Return

from .dtos import TenantResponse


class GetTenantUseCase:
    """Use case for reading one tenant with its member counts"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, tenant_id: UUID) -> Result[TenantResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_visible(caller, tenant_id)
            if tenant is None:
                return Return.err(not_found_error("Tenant"))

            return Return.ok(
                TenantResponse.build(
                    tenant,
                    user_count=await self.uow.profiles.count_by_tenant(tenant.id),
                    active_users=await self.uow.profiles.count_by_tenant(
                        tenant.id, status=UserStatus.active
                    ),
                )
            )
