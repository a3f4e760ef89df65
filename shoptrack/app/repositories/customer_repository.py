from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Customer


class ICustomerRepository(ABC):
    """Customer repository interface - application layer"""

    @abstractmethod
    async def get_visible(
        self, caller: CallerContext, tenant_id: UUID, customer_id: int
    ) -> Optional[Customer]:
        """Get customer by ID within tenant"""
        pass

    @abstractmethod
    async def list_visible(
        self,
        caller: CallerContext,
        tenant_id: UUID,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Customer]:
        """List customers of a tenant, newest first"""
        pass

    @abstractmethod
    async def count_visible(
        self, caller: CallerContext, tenant_id: UUID, created_since: Optional[datetime] = None
    ) -> int:
        """Count customers of a tenant"""
        pass

    @abstractmethod
    async def create(self, caller: CallerContext, customer: Customer) -> Customer:
        """Create a new customer"""
        pass

    @abstractmethod
    async def update(
        self, caller: CallerContext, customer: Customer, changes: Dict[str, Any]
    ) -> Customer:
        """Apply changes to an existing customer"""
        pass

    @abstractmethod
    async def delete(self, caller: CallerContext, customer: Customer) -> None:
        """Delete a customer"""
        pass
