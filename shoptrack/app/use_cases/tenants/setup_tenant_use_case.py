"""
Setup Tenant Use Case

Self-service onboarding: a signed-up user without a tenant creates their
business and joins it.
"""

import logging

from shoptrack.app.services.guards import translate_store_errors
from shoptrack.app.services.tenant_capacity import reserve_seat
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.app.use_cases.users.dtos import UserResponse
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Tenant, UserProfile, UserRole, UserStatus
from shoptrack.libs.result import Error, Result, Return

from .dtos import SetupTenantCommand, SetupTenantResponse, TenantResponse

logger = logging.getLogger(__name__)


def already_assigned_error() -> Error:
    return Error("TENANT_ALREADY_ASSIGNED", "Your account already belongs to a tenant")


class SetupTenantUseCase:
    """
    Use case for self-service tenant setup.

    Business Rules:
    - Only callers without a tenant (TENANT_ALREADY_ASSIGNED otherwise)
    - Tenant gets default status, plan and capacity; created_by is the caller
    - The caller joins the new tenant keeping their role; a caller without a
      stored profile gets one as tenant_user
    - The tenant id is also recorded in the identity metadata
    - Tenant, membership and metadata are committed together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, command: SetupTenantCommand
    ) -> Result[SetupTenantResponse]:
        """
        Execute setup tenant use case.

        Args:
            caller: Resolved caller
            command: Business name and optional contact details

        Returns:
            Result with SetupTenantResponse, or Error
        """
        if caller.tenant_id is not None:
            return Return.err(already_assigned_error())

        async with self.uow:
            identity = await self.uow.identities.get_by_id(caller.user_id)
            if identity is None:
                return Return.err(Error("NOT_AUTHENTICATED", "Session is no longer valid"))

            profile = await self.uow.profiles.get_by_id(caller.user_id)
            if profile is not None and profile.tenant_id is not None:
                return Return.err(already_assigned_error())

            tenant = Tenant(
                name=command.name.strip(),
                address=command.address or None,
                contact_info=command.contact_info or None,
                created_by=identity.id,
            )
            tenant = await self.uow.tenants.create_unscoped(tenant)

            seat = await reserve_seat(self.uow, tenant.id)
            if seat.is_err():
                return Return.err(seat.error)

            if profile is None:
                profile = await self.uow.profiles.create_unscoped(
                    UserProfile(
                        id=identity.id,
                        email=identity.email,
                        role=UserRole.tenant_user,
                        tenant_id=tenant.id,
                        full_name=identity.user_metadata.get("full_name") or identity.email,
                        status=UserStatus.active,
                    )
                )
            else:
                profile = await self.uow.profiles.update_unscoped(profile, {"tenant_id": tenant.id})

            identity.user_metadata = {**(identity.user_metadata or {}), "tenant_id": str(tenant.id)}
            await self.uow.identities.update(identity)

            await self.uow.commit()
            logger.info(f"Tenant {tenant.id} set up by {identity.id}")

            return Return.ok(
                SetupTenantResponse(
                    tenant=TenantResponse.build(tenant, user_count=1, active_users=1),
                    user=UserResponse.build(profile, tenant),
                )
            )
