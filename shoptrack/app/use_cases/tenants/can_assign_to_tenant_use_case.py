from uuid import UUID

from shoptrack.app.services.guards import not_found_error, translate_store_errors
from shoptrack.app.services.tenant_capacity import (
    at_capacity_error,
    measure_capacity,
    tenant_not_found_error,
)
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.libs.result import Result, Return

from .dtos import AssignmentCheck


class CanAssignToTenantUseCase:
    """
    Use case for checking a user can be moved into a tenant.

    Business Rules:
    - The user must be visible to the caller (NOT_FOUND otherwise)
    - Already in the target tenant: always allowed
    - Otherwise the target must have room (TENANT_AT_CAPACITY reports n/m)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, user_id: UUID, tenant_id: UUID
    ) -> Result[AssignmentCheck]:
        async with self.uow:
            profile = await self.uow.profiles.get_visible(caller, user_id)
            if profile is None:
                return Return.err(not_found_error("User"))

            if profile.tenant_id == tenant_id:
                return Return.ok(AssignmentCheck(can_assign=True, already_assigned=True))

            tenant = await self.uow.tenants.get_visible(caller, tenant_id)
            if tenant is None:
                return Return.err(tenant_not_found_error())

            capacity = await measure_capacity(self.uow, tenant)
            if not capacity.can_add:
                return Return.err(at_capacity_error(capacity))

            return Return.ok(AssignmentCheck(can_assign=True, capacity=capacity))
