from uuid import UUID

from shoptrack.app.services.guards import not_found_error, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserStatus
from shoptrack.domain.policy import Resource, changed_values, check_update
from shoptrack.libs.result import Error, Result, Return

from .dtos import TenantResponse, UpdateTenantCommand

NULLABLE_FIELDS = ("address", "contact_info")


class UpdateTenantUseCase:
    """
    Use case for updating a tenant.

    Business Rules:
    - super_admin only
    - max_users must stay at least 1; lowering it below the current member
      count is allowed and only blocks further admissions
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, tenant_id: UUID, command: UpdateTenantCommand
    ) -> Result[TenantResponse]:
        if command.max_users is not None and command.max_users < 1:
            return Return.err(Error("VALIDATION_FAILED", "max_users must be at least 1"))

        async with self.uow:
            tenant = await self.uow.tenants.get_visible(caller, tenant_id)
            if tenant is None:
                return Return.err(not_found_error("Tenant"))

            requested = {
                key: value
                for key, value in command.model_dump(exclude_unset=True).items()
                if value is not None or key in NULLABLE_FIELDS
            }
            changes = changed_values(tenant, requested)

            denial = check_update(caller, Resource.tenants, tenant, changes)
            if denial is not None:
                return Return.err(denial)

            tenant = await self.uow.tenants.update(caller, tenant, changes)
            response = TenantResponse.build(
                tenant,
                user_count=await self.uow.profiles.count_by_tenant(tenant.id),
                active_users=await self.uow.profiles.count_by_tenant(
                    tenant.id, status=UserStatus.active
                ),
            )
            await self.uow.commit()
            return Return.ok(response)
