"""
Create User Use Case

Admin-driven account creation with capacity-checked tenant admission.
"""

import logging

import bcrypt

from shoptrack.app.services.guards import no_tenant_error, translate_store_errors
from shoptrack.app.services.tenant_capacity import reserve_seat
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Identity, UserProfile, UserRole
from shoptrack.domain.policy import Action, Resource, RowRef, write_denial
from shoptrack.libs.result import Error, Result, Return

from .dtos import CreateUserCommand, UserResponse

logger = logging.getLogger(__name__)

TENANT_BOUND_ROLES = (UserRole.tenant_admin, UserRole.tenant_user)


class CreateUserUseCase:
    """
    Use case for creating a user account (identity + profile).

    Business Rules:
    - super_admin may create any role in any tenant
    - tenant_admin may only create tenant_user accounts, always in their own tenant
    - tenant_user may not create accounts
    - tenant_admin and tenant_user roles require a tenant
    - Email must be unique
    - Joining a tenant locks the tenant row, recounts its members and inserts
      in the same transaction; a full tenant fails with TENANT_AT_CAPACITY
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, command: CreateUserCommand) -> Result[UserResponse]:
        """
        Execute create user use case.

        Args:
            caller: Resolved caller
            command: Account details

        Returns:
            Result with UserResponse, or Error
        """
        if caller.role == UserRole.tenant_user:
            return Return.err(Error("INSUFFICIENT_ROLE", "Only admins can create users"))

        tenant_id = command.tenant_id
        if caller.role == UserRole.tenant_admin:
            if caller.tenant_id is None:
                return Return.err(no_tenant_error())
            tenant_id = caller.tenant_id

        denial = write_denial(
            caller, Resource.user_profiles, RowRef(tenant_id=tenant_id, role=command.role), Action.create
        )
        if denial is not None:
            return Return.err(denial)

        if command.role in TENANT_BOUND_ROLES and tenant_id is None:
            return Return.err(
                Error("VALIDATION_FAILED", f"A {command.role.value} must belong to a tenant")
            )

        email = command.email.lower()

        async with self.uow:
            if await self.uow.identities.get_by_email(email) is not None:
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))

            tenant = None
            if tenant_id is not None:
                seat = await reserve_seat(self.uow, tenant_id)
                if seat.is_err():
                    return Return.err(seat.error)
                tenant = await self.uow.tenants.get_by_id(tenant_id)

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
                role=command.role,
                tenant_id=tenant_id,
                full_name=command.full_name or email,
                status=command.status,
                created_by=caller.user_id,
            )
            profile = await self.uow.profiles.create(caller, profile)

            await self.uow.commit()
            logger.info(f"User {profile.id} created by {caller.user_id} as {profile.role.value}")

            return Return.ok(UserResponse.build(profile, tenant))
