from datetime import timedelta

from shoptrack.app.services.guards import translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.base import utcnow
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserRole, UserStatus
from shoptrack.libs.result import Result, Return

from .dtos import UserStatsResponse

RECENT_LOGIN_WINDOW = timedelta(days=30)


class UserStatsUseCase:
    """Counts per role and status over the profiles the caller may read"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext) -> Result[UserStatsResponse]:
        async with self.uow:
            count = self.uow.profiles.count_visible
            return Return.ok(
                UserStatsResponse(
                    total_users=await count(caller),
                    super_admins=await count(caller, role=UserRole.super_admin),
                    tenant_admins=await count(caller, role=UserRole.tenant_admin),
                    tenant_users=await count(caller, role=UserRole.tenant_user),
                    active_users=await count(caller, status=UserStatus.active),
                    inactive_users=await count(caller, status=UserStatus.inactive),
                    suspended_users=await count(caller, status=UserStatus.suspended),
                    recent_logins=await count(
                        caller, logged_in_since=utcnow() - RECENT_LOGIN_WINDOW
                    ),
                )
            )
