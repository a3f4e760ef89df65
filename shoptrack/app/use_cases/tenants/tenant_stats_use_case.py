from shoptrack.app.services.guards import translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import TenantStatus
from shoptrack.libs.result import Result, Return

from .dtos import TenantStatsResponse


class TenantStatsUseCase:
    """Counts of visible tenants per status"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext) -> Result[TenantStatsResponse]:
        async with self.uow:
            counts = await self.uow.tenants.count_by_status(caller)
            return Return.ok(
                TenantStatsResponse(
                    total_tenants=sum(counts.values()),
                    active_tenants=counts[TenantStatus.active],
                    inactive_tenants=counts[TenantStatus.inactive],
                    suspended_tenants=counts[TenantStatus.suspended],
                )
            )
