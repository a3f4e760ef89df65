from typing import Any, Dict
from uuid import UUID

from shoptrack.app.services.guards import translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.libs.result import Error, Result, Return

from .dtos import IdentityResponse


class UpdateMetadataUseCase:
    """
    Use case for merging keys into the caller's identity metadata.

    Business Rules:
    - Keys are merged; existing keys not mentioned are kept
    - Metadata is informational only and never consulted for authorization
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, identity_id: UUID, metadata: Dict[str, Any]) -> Result[IdentityResponse]:
        async with self.uow:
            identity = await self.uow.identities.get_by_id(identity_id)
            if identity is None:
                return Return.err(Error("NOT_AUTHENTICATED", "Session is no longer valid"))

            # Reassign so the JSON column is seen as changed
            identity.user_metadata = {**(identity.user_metadata or {}), **metadata}
            identity = await self.uow.identities.update(identity)
            await self.uow.commit()

            return Return.ok(IdentityResponse.model_validate(identity))
