from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Product


class IProductRepository(ABC):
    """Product repository interface - application layer"""

    @abstractmethod
    async def get_visible(
        self, caller: CallerContext, tenant_id: UUID, product_id: int
    ) -> Optional[Product]:
        """Get product (with its category) by ID within tenant"""
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def count_by_category(
        self, caller: CallerContext, tenant_id: UUID, category_id: int
    ) -> int:
        """Count products of a tenant referencing a category"""
        pass

    @abstractmethod
    async def create(self, caller: CallerContext, product: Product) -> Product:
        """Create a new product"""
        pass

    @abstractmethod
    async def update(
        self, caller: CallerContext, product: Product, changes: Dict[str, Any]
    ) -> Product:
        """Apply changes to an existing product"""
        pass

    @abstractmethod
    async def delete(self, caller: CallerContext, product: Product) -> None:
        """Delete a product"""
        pass
