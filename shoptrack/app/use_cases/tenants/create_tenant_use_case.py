import logging

from shoptrack.app.services.guards import translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Tenant
from shoptrack.libs.result import Error, Result, Return

from .dtos import CreateTenantCommand, TenantResponse

logger = logging.getLogger(__name__)


class CreateTenantUseCase:
    """
    Use case for creating a tenant.

    Business Rules:
    - super_admin only
    - max_users must be at least 1
    - created_by is the caller
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, command: CreateTenantCommand) -> Result[TenantResponse]:
        if not caller.is_super_admin:
            return Return.err(Error("INSUFFICIENT_ROLE", "Only super admins can create tenants"))

        if command.max_users < 1:
            return Return.err(Error("VALIDATION_FAILED", "max_users must be at least 1"))

        async with self.uow:
            tenant = Tenant(
                name=command.name.strip(),
                address=command.address or None,
                contact_info=command.contact_info or None,
                status=command.status,
                subscription_plan=command.subscription_plan,
                max_users=command.max_users,
                settings=command.settings,
                created_by=caller.user_id,
            )
            tenant = await self.uow.tenants.create(caller, tenant)
            await self.uow.commit()

            logger.info(f"Tenant {tenant.id} created by {caller.user_id}")
            return Return.ok(TenantResponse.build(tenant))
