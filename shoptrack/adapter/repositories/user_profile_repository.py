from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from shoptrack.app.repositories.user_profile_repository import IUserProfileRepository
from shoptrack.domain.base import utcnow
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserProfile, UserRole, UserStatus
from shoptrack.domain.policy import Action, Resource, changed_values, read_scope

from .scoping import enforce_update, enforce_write, scope_clause, search_clause


class UserProfileRepository(IUserProfileRepository):
    """UserProfile repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _visible(self, caller: CallerContext, stmt):
        scope = read_scope(caller, Resource.user_profiles)
        return stmt.where(scope_clause(scope, UserProfile.tenant_id, UserProfile.id))

    async def get_by_id(self, user_id: UUID) -> Optional[UserProfile]:
        """Get profile by ID"""
        stmt = select(UserProfile).where(UserProfile.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_visible(self, caller: CallerContext, user_id: UUID) -> Optional[UserProfile]:
        """Get profile by ID if the caller may read it"""
        stmt = self._visible(caller, select(UserProfile)).where(UserProfile.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

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
        stmt = self._visible(caller, select(UserProfile))
        if role is not None:
            stmt = stmt.where(UserProfile.role == role)
        if status is not None:
            stmt = stmt.where(UserProfile.status == status)
        if tenant_id is not None:
            stmt = stmt.where(UserProfile.tenant_id == tenant_id)
        if exclude_id is not None:
            stmt = stmt.where(UserProfile.id != exclude_id)
        matches = search_clause(search, UserProfile.full_name, UserProfile.email)
        if matches is not None:
            stmt = stmt.where(matches)
        stmt = stmt.order_by(UserProfile.created_at.desc()).offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_visible(
        self,
        caller: CallerContext,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
        logged_in_since: Optional[datetime] = None,
    ) -> int:
        """Count profiles the caller may read"""
        stmt = self._visible(caller, select(func.count()).select_from(UserProfile))
        if role is not None:
            stmt = stmt.where(UserProfile.role == role)
        if status is not None:
            stmt = stmt.where(UserProfile.status == status)
        if logged_in_since is not None:
            stmt = stmt.where(UserProfile.last_login >= logged_in_since)
        result = await self.session.exec(stmt)
        return result.one()

    async def count_by_tenant(self, tenant_id: UUID, status: Optional[UserStatus] = None) -> int:
        """Count members of a tenant regardless of caller"""
        stmt = select(func.count()).select_from(UserProfile).where(UserProfile.tenant_id == tenant_id)
        if status is not None:
            stmt = stmt.where(UserProfile.status == status)
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, caller: CallerContext, profile: UserProfile) -> UserProfile:
        """Create a new profile"""
        enforce_write(caller, Resource.user_profiles, profile, Action.create)
        return await self.create_unscoped(profile)

    async def create_unscoped(self, profile: UserProfile) -> UserProfile:
        """Create a profile on behalf of the system (signup)"""
        profile.email = profile.email.lower()
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def update(
        self, caller: CallerContext, profile: UserProfile, changes: Dict[str, Any]
    ) -> UserProfile:
        """Apply changes to an existing profile"""
        changes = changed_values(profile, changes)
        enforce_update(caller, Resource.user_profiles, profile, changes)
        return await self.update_unscoped(profile, changes)

    async def update_unscoped(self, profile: UserProfile, changes: Dict[str, Any]) -> UserProfile:
        """Apply changes on behalf of the system (sign-in, onboarding)"""
        for key, value in changes.items():
            setattr(profile, key, value)
        profile.updated_at = utcnow()
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def delete(self, caller: CallerContext, profile: UserProfile) -> None:
        """Delete a profile"""
        enforce_write(caller, Resource.user_profiles, profile, Action.delete)
        await self.session.delete(profile)
        await self.session.flush()
