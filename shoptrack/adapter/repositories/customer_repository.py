from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from shoptrack.app.repositories.customer_repository import ICustomerRepository
from shoptrack.domain.base import utcnow
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Customer
from shoptrack.domain.policy import Action, Resource, changed_values, read_scope

from .scoping import enforce_update, enforce_write, scope_clause, search_clause


class CustomerRepository(ICustomerRepository):
    """Customer repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _visible(self, caller: CallerContext, tenant_id: UUID, stmt):
        scope = read_scope(caller, Resource.customers)
        return stmt.where(
            Customer.tenant_id == tenant_id, scope_clause(scope, Customer.tenant_id)
        )

    async def get_visible(
        self, caller: CallerContext, tenant_id: UUID, customer_id: int
    ) -> Optional[Customer]:
        """Get customer by ID within tenant"""
        stmt = self._visible(caller, tenant_id, select(Customer)).where(Customer.id == customer_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_visible(
        self,
        caller: CallerContext,
        tenant_id: UUID,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Customer]:
        """List customers of a tenant, newest first"""
        stmt = self._visible(caller, tenant_id, select(Customer))
        matches = search_clause(search, Customer.name, Customer.email, Customer.phone)
        if matches is not None:
            stmt = stmt.where(matches)
        stmt = stmt.order_by(Customer.created_at.desc(), Customer.id.desc())
        stmt = stmt.offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_visible(
        self, caller: CallerContext, tenant_id: UUID, created_since: Optional[datetime] = None
    ) -> int:
        """Count customers of a tenant"""
        stmt = self._visible(caller, tenant_id, select(func.count()).select_from(Customer))
        if created_since is not None:
            stmt = stmt.where(Customer.created_at >= created_since)
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, caller: CallerContext, customer: Customer) -> Customer:
        """Create a new customer"""
        enforce_write(caller, Resource.customers, customer, Action.create)
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def update(
        self, caller: CallerContext, customer: Customer, changes: Dict[str, Any]
    ) -> Customer:
        """Apply changes to an existing customer"""
        changes = changed_values(customer, changes)
        enforce_update(caller, Resource.customers, customer, changes)
        for key, value in changes.items():
            setattr(customer, key, value)
        customer.updated_at = utcnow()
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def delete(self, caller: CallerContext, customer: Customer) -> None:
        """Delete a customer"""
        enforce_write(caller, Resource.customers, customer, Action.delete)
        await self.session.delete(customer)
        await self.session.flush()
