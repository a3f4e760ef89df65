"""
Delete Tenant Use Case

Removes a tenant with all of its tenant-scoped data.
"""

import logging
from uuid import UUID

from shoptrack.app.services.guards import not_found_error, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.policy import Action, Resource, check_write
from shoptrack.libs.result import Result, Return

from .dtos import DeleteTenantResponse

logger = logging.getLogger(__name__)


class DeleteTenantUseCase:
    """
    Use case for deleting a tenant.

    Business Rules:
    - super_admin only
    - Customers, products and categories of the tenant are deleted with it
    - Member profiles are kept but detached (tenant_id = NULL); tenant
      admins among them become tenant users
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, tenant_id: UUID) -> Result[DeleteTenantResponse]:
        """
        Execute delete tenant use case.

        Args:
            caller: Resolved caller
            tenant_id: Tenant to delete

        Returns:
            Result with DeleteTenantResponse, or Error
        """
        async with self.uow:
            tenant = await self.uow.tenants.get_visible(caller, tenant_id)
            if tenant is None:
                return Return.err(not_found_error("Tenant"))

            denial = check_write(caller, Resource.tenants, tenant, Action.delete)
            if denial is not None:
                return Return.err(denial)

            detached = await self.uow.profiles.count_by_tenant(tenant_id)
            await self.uow.tenants.delete(caller, tenant)
            await self.uow.commit()

            logger.info(
                f"Tenant {tenant_id} deleted by {caller.user_id}; {detached} user(s) detached"
            )
            return Return.ok(
                DeleteTenantResponse(
                    status="deleted",
                    message="Tenant and its data have been deleted",
                    detached_users=detached,
                )
            )
