from typing import List

from shoptrack.app.services.guards import page_window, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.libs.result import Result, Return

from .dtos import ListUsersQuery, UserResponse


class ListUsersUseCase:
    """
    Use case for listing users visible to the caller.

    Business Rules:
    - super_admin sees every profile
    - tenant_admin sees the profiles of their tenant and their own
    - tenant_user sees only their own profile
    - Search matches full_name or email, case-insensitive
    - Newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, query: ListUsersQuery) -> Result[List[UserResponse]]:
        limit, offset = page_window(query.limit, query.offset)

        async with self.uow:
            profiles = await self.uow.profiles.list_visible(
                caller,
                role=query.role,
                status=query.status,
                tenant_id=query.tenant_id,
                search=query.search,
                exclude_id=caller.user_id if query.exclude_self else None,
                limit=limit,
                offset=offset,
            )
            return Return.ok([UserResponse.build(profile, profile.tenant) for profile in profiles])
