from uuid import UUID

from shoptrack.app.services.guards import not_found_error, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.libs.result import Result, Return

from .dtos import UserResponse


class GetUserUseCase:
    """
    Use case for reading one user profile.

    Business Rules:
    - Rows outside the caller's read scope are reported as NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, user_id: UUID) -> Result[UserResponse]:
        async with self.uow:
            profile = await self.uow.profiles.get_visible(caller, user_id)
            if profile is None:
                return Return.err(not_found_error("User"))

            tenant = None
            if profile.tenant_id is not None:
                tenant = await self.uow.tenants.get_by_id(profile.tenant_id)

            return Return.ok(UserResponse.build(profile, tenant))
