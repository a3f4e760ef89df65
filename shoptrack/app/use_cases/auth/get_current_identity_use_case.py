from typing import Optional
from uuid import UUID

from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.libs.result import Error, Result, Return

from .dtos import IdentityResponse


class GetCurrentIdentityUseCase:
    """Load the identity behind a verified token; NOT_AUTHENTICATED if it is gone"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity_id: Optional[UUID]) -> Result[IdentityResponse]:
        if identity_id is None:
            return Return.err(Error("NOT_AUTHENTICATED", "Authentication required"))

        async with self.uow:
            identity = await self.uow.identities.get_by_id(identity_id)
            if identity is None:
                return Return.err(Error("NOT_AUTHENTICATED", "Session is no longer valid"))
            return Return.ok(IdentityResponse.model_validate(identity))
