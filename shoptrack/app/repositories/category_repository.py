from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Category


class ICategoryRepository(ABC):
    """Category repository interface - application layer"""

    @abstractmethod
    async def get_visible(
        self, caller: CallerContext, tenant_id: UUID, category_id: int
    ) -> Optional[Category]:
        """Get category by ID within tenant"""
        pass

    @abstractmethod
    async def get_by_name(self, caller: CallerContext, tenant_id: UUID, name: str) -> Optional[Category]:
        """Get category by exact name within tenant"""
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def count_visible(self, caller: CallerContext, tenant_id: UUID) -> int:
        """Count categories of a tenant"""
        pass

    @abstractmethod
    async def count_with_products(self, caller: CallerContext, tenant_id: UUID) -> int:
        """Count categories of a tenant referenced by at least one product"""
        pass

    @abstractmethod
    async def create(self, caller: CallerContext, category: Category) -> Category:
        """Create a new category"""
        pass

    @abstractmethod
    async def update(
        self, caller: CallerContext, category: Category, changes: Dict[str, Any]
    ) -> Category:
        """Apply changes to an existing category"""
        pass

    @abstractmethod
    async def delete(self, caller: CallerContext, category: Category) -> None:
        """Delete a category"""
        pass
