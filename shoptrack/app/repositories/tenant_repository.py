from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Tenant, TenantStatus


class ITenantRepository(ABC):
    """Tenant repository interface - application layer

    Methods taking a caller apply the access policy; the rest are system
    reads used for capacity accounting.
    """

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID, for_update: bool = False) -> Optional[Tenant]:
        """Get tenant by ID, optionally locking the row until commit"""
        pass

    @abstractmethod
    async def get_visible(self, caller: CallerContext, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID if the caller may read it"""
        pass

    @abstractmethod
    async def list_visible(
        self,
        caller: CallerContext,
        status: Optional[TenantStatus] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Tenant]:
        """List tenants the caller may read, newest first"""
        pass

    @abstractmethod
    async def list_active_for_select(self, caller: CallerContext) -> List[Tenant]:
        """Active tenants the caller may read, ordered by name"""
        pass

    @abstractmethod
    async def count_by_status(self, caller: CallerContext) -> Dict[TenantStatus, int]:
        """Count visible tenants per status"""
        pass

    @abstractmethod
    async def create(self, caller: CallerContext, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        pass

    @abstractmethod
    async def create_unscoped(self, tenant: Tenant) -> Tenant:
        """Create a tenant on behalf of the system (self-service onboarding)"""
        pass

    @abstractmethod
    async def update(self, caller: CallerContext, tenant: Tenant, changes: Dict[str, Any]) -> Tenant:
        """Apply changes to an existing tenant"""
        pass

    @abstractmethod
    async def delete(self, caller: CallerContext, tenant: Tenant) -> None:
        """Delete tenant, its tenant-scoped rows, and detach its members"""
        pass
