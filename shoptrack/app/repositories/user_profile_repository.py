from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserProfile, UserRole, UserStatus


class IUserProfileRepository(ABC):
    """UserProfile repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[UserProfile]:
        """Get profile by ID without policy checks (caller resolution)"""
        pass

    @abstractmethod
    async def get_visible(self, caller: CallerContext, user_id: UUID) -> Optional[UserProfile]:
        """Get profile by ID if the caller may read it"""
        pass

    @abstractmethod
    async def list_visible(
        self,
        caller: CallerContext,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
        tenant_id: Optional[UUID] = None,
        search: Optional[str] = None,
        exclude_id: Optional[UUID] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[UserProfile]:
        """List profiles the caller may read, newest first"""
        pass

    @abstractmethod
    async def count_visible(
        self,
        caller: CallerContext,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
        logged_in_since: Optional[datetime] = None,
    ) -> int:
        """Count profiles the caller may read"""
        pass

    @abstractmethod
    async def count_by_tenant(self, tenant_id: UUID, status: Optional[UserStatus] = None) -> int:
        """Count members of a tenant regardless of caller"""
        pass

    @abstractmethod
    async def create(self, caller: CallerContext, profile: UserProfile) -> UserProfile:
        """Create a new profile"""
        pass

    @abstractmethod
    async def create_unscoped(self, profile: UserProfile) -> UserProfile:
        """Create a profile on behalf of the system (signup)"""
        pass

    @abstractmethod
    async def update(
        self, caller: CallerContext, profile: UserProfile, changes: Dict[str, Any]
    ) -> UserProfile:
        """Apply changes to an existing profile"""
        pass

    @abstractmethod
    async def update_unscoped(self, profile: UserProfile, changes: Dict[str, Any]) -> UserProfile:
        """Apply changes on behalf of the system (sign-in, onboarding)"""
        pass

    @abstractmethod
    async def delete(self, caller: CallerContext, profile: UserProfile) -> None:
        """Delete a profile"""
        pass
