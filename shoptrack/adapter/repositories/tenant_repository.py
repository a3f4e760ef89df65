from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from shoptrack.app.repositories.tenant_repository import ITenantRepository
from shoptrack.domain.base import utcnow
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import (
    Category,
    Customer,
    Product,
    Tenant,
    TenantStatus,
    UserProfile,
    UserRole,
)
from shoptrack.domain.policy import Action, Resource, changed_values, read_scope

from .scoping import enforce_update, enforce_write, scope_clause, search_clause


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _visible(self, caller: CallerContext, stmt):
        scope = read_scope(caller, Resource.tenants)
        return stmt.where(scope_clause(scope, Tenant.id, Tenant.id))

    async def get_by_id(self, tenant_id: UUID, for_update: bool = False) -> Optional[Tenant]:
        """Get tenant by ID, optionally locking the row until commit"""
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        if for_update:
            # SQLite ignores FOR UPDATE and pysqlite defers BEGIN until the
            # first write, so a no-op UPDATE takes the write lock first
            await self.session.execute(
                update(Tenant)
                .where(Tenant.id == tenant_id)
                .values(max_users=Tenant.max_users)
                .execution_options(synchronize_session=False)
            )
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_visible(self, caller: CallerContext, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID if the caller may read it"""
        stmt = self._visible(caller, select(Tenant)).where(Tenant.id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_visible(
        self,
        caller: CallerContext,
        status: Optional[TenantStatus] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Tenant]:
        """List tenants the caller may read, newest first"""
        stmt = self._visible(caller, select(Tenant))
        if status is not None:
            stmt = stmt.where(Tenant.status == status)
        matches = search_clause(search, Tenant.name, Tenant.address)
        if matches is not None:
            stmt = stmt.where(matches)
        stmt = stmt.order_by(Tenant.created_at.desc()).offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_active_for_select(self, caller: CallerContext) -> List[Tenant]:
        """Active tenants the caller may read, ordered by name"""
        stmt = (
            self._visible(caller, select(Tenant))
            .where(Tenant.status == TenantStatus.active)
            .order_by(Tenant.name.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_status(self, caller: CallerContext) -> Dict[TenantStatus, int]:
        """Count visible tenants per status"""
        stmt = self._visible(caller, select(Tenant.status, func.count())).group_by(Tenant.status)
        result = await self.session.exec(stmt)
        counts = {status: 0 for status in TenantStatus}
        for status, count in result.all():
            counts[TenantStatus(status)] = count
        return counts

    async def create(self, caller: CallerContext, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        enforce_write(caller, Resource.tenants, tenant, Action.create)
        return await self.create_unscoped(tenant)

    async def create_unscoped(self, tenant: Tenant) -> Tenant:
        """Create a tenant on behalf of the system (self-service onboarding)"""
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def update(self, caller: CallerContext, tenant: Tenant, changes: Dict[str, Any]) -> Tenant:
        """Apply changes to an existing tenant"""
        changes = changed_values(tenant, changes)
        enforce_update(caller, Resource.tenants, tenant, changes)
        for key, value in changes.items():
            setattr(tenant, key, value)
        tenant.updated_at = utcnow()
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def delete(self, caller: CallerContext, tenant: Tenant) -> None:
        """Delete tenant, its tenant-scoped rows, and detach its members"""
        enforce_write(caller, Resource.tenants, tenant, Action.delete)

        await self.session.execute(delete(Product).where(Product.tenant_id == tenant.id))
        await self.session.execute(delete(Category).where(Category.tenant_id == tenant.id))
        await self.session.execute(delete(Customer).where(Customer.tenant_id == tenant.id))

        # Members survive without a tenant; nobody stays an admin of nothing
        await self.session.execute(
            update(UserProfile)
            .where(UserProfile.tenant_id == tenant.id, UserProfile.role == UserRole.tenant_admin)
            .values(role=UserRole.tenant_user)
        )
        await self.session.execute(
            update(UserProfile)
            .where(UserProfile.tenant_id == tenant.id)
            .values(tenant_id=None, updated_at=utcnow())
        )

        await self.session.delete(tenant)
        await self.session.flush()
