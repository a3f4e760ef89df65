import logging
from uuid import UUID

from shoptrack.app.services.guards import not_found_error, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.policy import Action, Resource, check_write
from shoptrack.libs.result import Result, Return

from .dtos import DeleteUserResponse

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Use case for deleting a user.

    Business Rules:
    - Same write rules as updates (tenant_admin: tenant_user rows of own tenant)
    - Removes the identity; the profile goes with it
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, user_id: UUID) -> Result[DeleteUserResponse]:
        async with self.uow:
            profile = await self.uow.profiles.get_visible(caller, user_id)
            if profile is None:
                return Return.err(not_found_error("User"))

            denial = check_write(caller, Resource.user_profiles, profile, Action.delete)
            if denial is not None:
                return Return.err(denial)

            identity = await self.uow.identities.get_by_id(user_id)
            await self.uow.profiles.delete(caller, profile)
            if identity is not None:
                await self.uow.identities.delete(identity)

            await self.uow.commit()
            logger.info(f"User {user_id} deleted by {caller.user_id}")

            return Return.ok(DeleteUserResponse(status="deleted", message="User deleted"))
