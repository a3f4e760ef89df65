import logging
from uuid import UUID

import bcrypt

from shoptrack.app.services.guards import not_found_error, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.libs.result import Error, Result, Return

from .dtos import ResetPasswordResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for setting another user's password.

    Business Rules:
    - super_admin only
    - Password stored as bcrypt hash (cost factor 12)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, user_id: UUID, new_password: str
    ) -> Result[ResetPasswordResponse]:
        if not caller.is_super_admin:
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only super admins can reset passwords")
            )

        async with self.uow:
            identity = await self.uow.identities.get_by_id(user_id)
            if identity is None:
                return Return.err(not_found_error("User"))

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(12))
            identity.password_hash = password_hash.decode()
            await self.uow.identities.update(identity)
            await self.uow.commit()

            logger.info(f"Password of {user_id} reset by {caller.user_id}")
            return Return.ok(
                ResetPasswordResponse(status="updated", message="Password has been reset")
            )
