"""
Update User Use Case

Profile edits, role and status changes, and tenant reassignment.
"""

from uuid import UUID

from shoptrack.app.services.guards import not_found_error, translate_store_errors
from shoptrack.app.services.tenant_capacity import reserve_seat
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserRole
from shoptrack.domain.policy import Resource, changed_values, check_update
from shoptrack.libs.result import Error, Result, Return

from .dtos import UpdateUserCommand, UserResponse

# Explicit null clears these; for the rest null means "leave unchanged"
NULLABLE_FIELDS = ("full_name", "tenant_id")


class UpdateUserUseCase:
    """
    Use case for updating a user profile.

    Business Rules:
    - Nobody changes their own role or status (SELF_PRIVILEGE_ESCALATION);
      re-submitting the current value is not a change
    - Outside super_admin, only full_name of one's own row may change
    - tenant_admin only updates tenant_user rows of their tenant and may not
      produce a tenant_admin or super_admin row
    - tenant_admin and tenant_user roles require a tenant
    - Moving a user into another tenant goes through capacity admission
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, user_id: UUID, command: UpdateUserCommand
    ) -> Result[UserResponse]:
        """
        Execute update user use case.

        Args:
            caller: Resolved caller
            user_id: Profile to update
            command: Fields to change; unset fields are left alone

        Returns:
            Result with the updated UserResponse, or Error
        """
        async with self.uow:
            profile = await self.uow.profiles.get_visible(caller, user_id)
            if profile is None:
                return Return.err(not_found_error("User"))

            requested = {
                key: value
                for key, value in command.model_dump(exclude_unset=True).items()
                if value is not None or key in NULLABLE_FIELDS
            }
            changes = changed_values(profile, requested)

            denial = check_update(caller, Resource.user_profiles, profile, changes)
            if denial is not None:
                return Return.err(denial)

            role = changes.get("role", profile.role)
            tenant_id = changes.get("tenant_id", profile.tenant_id)
            reassigned = "role" in changes or "tenant_id" in changes
            if reassigned and role != UserRole.super_admin and tenant_id is None:
                return Return.err(
                    Error("VALIDATION_FAILED", f"A {role.value} must belong to a tenant")
                )

            if "tenant_id" in changes and tenant_id is not None:
                seat = await reserve_seat(self.uow, tenant_id)
                if seat.is_err():
                    return Return.err(seat.error)

            profile = await self.uow.profiles.update(caller, profile, changes)

            tenant = None
            if profile.tenant_id is not None:
                tenant = await self.uow.tenants.get_by_id(profile.tenant_id)

            await self.uow.commit()
            return Return.ok(UserResponse.build(profile, tenant))
