"""
Sign Up Use Case

Self-service account creation. New accounts start unassigned; the tenant is
chosen afterwards through tenant setup.
"""

import logging

import bcrypt

from shoptrack.app.services.guards import translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.app.use_cases.users.dtos import UserResponse
from shoptrack.domain.entities import Identity, UserProfile, UserRole, UserStatus
from shoptrack.libs.result import Error, Result, Return

from .dtos import SignUpCommand, SignUpResponse
from .session import issue_session

logger = logging.getLogger(__name__)


class SignUpUseCase:
    """
    Use case for self-service signup.

    Business Rules:
    - Email must be unique (EMAIL_ALREADY_EXISTS)
    - Password stored as bcrypt hash (cost factor 12)
    - Profile created as an active tenant_user without tenant
    - full_name defaults to the email address
    - Returns a session so onboarding can continue immediately
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, command: SignUpCommand) -> Result[SignUpResponse]:
        """
        Execute sign-up use case.

        Args:
            command: SignUpCommand with validated email, password, full_name

        Returns:
            Result with SignUpResponse, or Error
        """
        email = command.email.lower()

        async with self.uow:
            if await self.uow.identities.get_by_email(email) is not None:
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))

            password_hash = bcrypt.hashpw(command.password.encode(), bcrypt.gensalt(12))
            identity = Identity(
                email=email,
                password_hash=password_hash.decode(),
                user_metadata={"full_name": command.full_name} if command.full_name else {},
            )
            identity = await self.uow.identities.create(identity)

            profile = UserProfile(
                id=identity.id,
                email=email,
                role=UserRole.tenant_user,
                tenant_id=None,
                full_name=command.full_name or email,
                status=UserStatus.active,
            )
            profile = await self.uow.profiles.create_unscoped(profile)

            await self.uow.commit()
            logger.info(f"Signed up {identity.id}")

            return Return.ok(
                SignUpResponse(
                    user=UserResponse.build(profile),
                    session=issue_session(identity.id, identity.email),
                )
            )
