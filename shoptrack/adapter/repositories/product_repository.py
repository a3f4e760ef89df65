from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from shoptrack.app.repositories.product_repository import IProductRepository
from shoptrack.domain.base import utcnow
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Product
from shoptrack.domain.policy import Action, Resource, changed_values, read_scope

from .scoping import enforce_update, enforce_write, scope_clause, search_clause


class ProductRepository(IProductRepository):
    """Product repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _visible(self, caller: CallerContext, tenant_id: UUID, stmt):
        scope = read_scope(caller, Resource.products)
        return stmt.where(Product.tenant_id == tenant_id, scope_clause(scope, Product.tenant_id))

    async def get_visible(
        self, caller: CallerContext, tenant_id: UUID, product_id: int
    ) -> Optional[Product]:
        """Get product (with its category) by ID within tenant"""
        stmt = self._visible(caller, tenant_id, select(Product)).where(Product.id == product_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_visible(
        self,
        caller: CallerContext,
        tenant_id: UUID,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        max_stock: Optional[int] = None,
        limit: Optional[int] = 10,
        offset: int = 0,
    ) -> List[Product]:
        """List products of a tenant, newest first; limit=None returns all"""
        stmt = self._visible(caller, tenant_id, select(Product))
        matches = search_clause(search, Product.name, Product.description)
        if matches is not None:
            stmt = stmt.where(matches)
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        if max_stock is not None:
            stmt = stmt.where(Product.stock_quantity <= max_stock)
        stmt = stmt.order_by(Product.created_at.desc(), Product.id.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_category(
        self, caller: CallerContext, tenant_id: UUID, category_id: int
    ) -> int:
        """Count products of a tenant referencing a category"""
        stmt = self._visible(caller, tenant_id, select(func.count()).select_from(Product)).where(
            Product.category_id == category_id
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, caller: CallerContext, product: Product) -> Product:
        """Create a new product"""
        enforce_write(caller, Resource.products, product, Action.create)
        self.session.add(product)
        await self.session.flush()
        await self.session.refresh(product)
        return product

    async def update(
        self, caller: CallerContext, product: Product, changes: Dict[str, Any]
    ) -> Product:
        """Apply changes to an existing product"""
        changes = changed_values(product, changes)
        enforce_update(caller, Resource.products, product, changes)
        for key, value in changes.items():
            setattr(product, key, value)
        product.updated_at = utcnow()
        self.session.add(product)
        await self.session.flush()
        await self.session.refresh(product)
        return product

    async def delete(self, caller: CallerContext, product: Product) -> None:
        """Delete a product"""
        enforce_write(caller, Resource.products, product, Action.delete)
        await self.session.delete(product)
        await self.session.flush()
