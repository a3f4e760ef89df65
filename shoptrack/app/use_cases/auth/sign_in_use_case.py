"""
Sign In Use Case

Password authentication issuing an identity-only access token.
"""

import bcrypt

from shoptrack.app.services.guards import translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.base import utcnow
from shoptrack.domain.entities import UserStatus
from shoptrack.libs.result import Error, Result, Return

from .dtos import SessionResponse
from .session import issue_session


class SignInUseCase:
    """
    Use case for sign-in.

    Business Rules:
    - Constant-time password comparison, even for unknown emails
    - Profiles that are not active cannot sign in (USER_INACTIVE)
    - An identity without profile may sign in; caller resolution decides
      what it may do
    - Updates identity.last_sign_in_at and profile.last_login
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, email: str, password: str) -> Result[SessionResponse]:
        """
        Execute sign-in use case.

        Args:
            email: Account email
            password: Plain text password

        Returns:
            Result with SessionResponse, or Error
        """
        async with self.uow:
            identity = await self.uow.identities.get_by_email(email)

            if identity is None:
                # Hash dummy password to maintain constant time
                bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(12))
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not bcrypt.checkpw(password.encode(), identity.password_hash.encode()):
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            profile = await self.uow.profiles.get_by_id(identity.id)
            if profile is not None and profile.status != UserStatus.active:
                return Return.err(
                    Error("USER_INACTIVE", f"User account is {profile.status.value}")
                )

            now = utcnow()
            identity.last_sign_in_at = now
            await self.uow.identities.update(identity)
            if profile is not None:
                await self.uow.profiles.update_unscoped(profile, {"last_login": now})

            await self.uow.commit()

            return Return.ok(issue_session(identity.id, identity.email))
