"""
Resolve Caller Use Case

Turns an authenticated identity into the CallerContext every other use case
is authorized against.
"""

import logging
from typing import Optional
from uuid import UUID

from config import ApplicationConfig
from shoptrack.app.services.guards import translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserRole, UserStatus
from shoptrack.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class ResolveCallerUseCase:
    """
    Use case for resolving the caller of a request.

    Business Rules:
    - Role, tenant and status come from the caller's own profile row, read
      fresh on every request; nothing is taken from the token
    - No identity (or a deleted one) fails with NOT_AUTHENTICATED
    - Identity without a profile: when the fallback is enabled, a transient
      tenant_user context without tenant is returned (never persisted);
      otherwise PROFILE_MISSING
    - Inactive or suspended profiles fail with USER_INACTIVE
    """

    def __init__(self, uow: UnitOfWork, allow_missing_profile_fallback: Optional[bool] = None):
        self.uow = uow
        if allow_missing_profile_fallback is None:
            allow_missing_profile_fallback = ApplicationConfig.ALLOW_MISSING_PROFILE_FALLBACK
        self.allow_missing_profile_fallback = allow_missing_profile_fallback

    @translate_store_errors
    async def execute(self, identity_id: Optional[UUID]) -> Result[CallerContext]:
        """
        Execute resolve caller use case.

        Args:
            identity_id: Identity from a verified access token, or None

        Returns:
            Result with CallerContext, or Error
        """
        if identity_id is None:
            return Return.err(Error("NOT_AUTHENTICATED", "Authentication required"))

        async with self.uow:
            identity = await self.uow.identities.get_by_id(identity_id)
            if identity is None:
                return Return.err(Error("NOT_AUTHENTICATED", "Session is no longer valid"))

            profile = await self.uow.profiles.get_by_id(identity_id)

            if profile is None:
                if not self.allow_missing_profile_fallback:
                    return Return.err(
                        Error("PROFILE_MISSING", "No user profile exists for this account")
                    )
                logger.warning(
                    f"No profile for identity {identity_id}; using a transient tenant_user context"
                )
                return Return.ok(
                    CallerContext(
                        user_id=identity.id,
                        email=identity.email,
                        role=UserRole.tenant_user,
                        tenant_id=None,
                        status=UserStatus.active,
                        synthesized=True,
                    )
                )

            if profile.status != UserStatus.active:
                return Return.err(
                    Error("USER_INACTIVE", f"User account is {profile.status.value}")
                )

            return Return.ok(
                CallerContext(
                    user_id=profile.id,
                    email=profile.email,
                    role=profile.role,
                    tenant_id=profile.tenant_id,
                    status=profile.status,
                )
            )
