from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from shoptrack.app.repositories.category_repository import ICategoryRepository
from shoptrack.domain.base import utcnow
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Category, Product
from shoptrack.domain.policy import Action, Resource, changed_values, read_scope

from .scoping import enforce_update, enforce_write, scope_clause, search_clause


class CategoryRepository(ICategoryRepository):
    """Category repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _visible(self, caller: CallerContext, tenant_id: UUID, stmt):
        scope = read_scope(caller, Resource.categories)
        return stmt.where(
            Category.tenant_id == tenant_id, scope_clause(scope, Category.tenant_id)
        )

    async def get_visible(
        self, caller: CallerContext, tenant_id: UUID, category_id: int
    ) -> Optional[Category]:
        """Get category by ID within tenant"""
        stmt = self._visible(caller, tenant_id, select(Category)).where(Category.id == category_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_name(self, caller: CallerContext, tenant_id: UUID, name: str) -> Optional[Category]:
        """Get category by exact name within tenant"""
        stmt = self._visible(caller, tenant_id, select(Category)).where(Category.name == name)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_visible(
        self,
        caller: CallerContext,
        tenant_id: UUID,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
        order_by_name: bool = False,
    ) -> List[Category]:
        """List categories of a tenant, newest first unless ordered by name"""
        stmt = self._visible(caller, tenant_id, select(Category))
        matches = search_clause(search, Category.name, Category.description)
        if matches is not None:
            stmt = stmt.where(matches)
        if order_by_name:
            stmt = stmt.order_by(Category.name.asc())
        else:
            stmt = stmt.order_by(Category.created_at.desc(), Category.id.desc())
        stmt = stmt.offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_visible(self, caller: CallerContext, tenant_id: UUID) -> int:
        """Count categories of a tenant"""
        stmt = self._visible(caller, tenant_id, select(func.count()).select_from(Category))
        result = await self.session.exec(stmt)
        return result.one()

    async def count_with_products(self, caller: CallerContext, tenant_id: UUID) -> int:
        """Count categories of a tenant referenced by at least one product"""
        stmt = self._visible(
            caller,
            tenant_id,
            select(func.count(func.distinct(Category.id)))
            .select_from(Category)
            .join(Product, Product.category_id == Category.id),
        ).where(Product.tenant_id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, caller: CallerContext, category: Category) -> Category:
        """Create a new category"""
        enforce_write(caller, Resource.categories, category, Action.create)
        self.session.add(category)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def update(
        self, caller: CallerContext, category: Category, changes: Dict[str, Any]
    ) -> Category:
        """Apply changes to an existing category"""
        changes = changed_values(category, changes)
        enforce_update(caller, Resource.categories, category, changes)
        for key, value in changes.items():
            setattr(category, key, value)
        category.updated_at = utcnow()
        self.session.add(category)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def delete(self, caller: CallerContext, category: Category) -> None:
        """Delete a category"""
        enforce_write(caller, Resource.categories, category, Action.delete)
        await self.session.delete(category)
        await self.session.flush()
