from typing import List

from shoptrack.app.services.guards import page_window, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserStatus
from shoptrack.libs.result import Result, Return

from .dtos import ListTenantsQuery, TenantResponse


class ListTenantsUseCase:
    """
    Use case for listing tenants with member counts.

    Business Rules:
    - super_admin sees every tenant, others only their own
    - Search matches name or address, case-insensitive
    - Newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, query: ListTenantsQuery
    ) -> Result[List[TenantResponse]]:
        limit, offset = page_window(query.limit, query.offset)

        async with self.uow:
            tenants = await self.uow.tenants.list_visible(
                caller, status=query.status, search=query.search, limit=limit, offset=offset
            )

            responses = []
            for tenant in tenants:
                responses.append(
                    TenantResponse.build(
                        tenant,
                        user_count=await self.uow.profiles.count_by_tenant(tenant.id),
                        active_users=await self.uow.profiles.count_by_tenant(
                            tenant.id, status=UserStatus.active
                        ),
                    )
                )
            return Return.ok(responses)
