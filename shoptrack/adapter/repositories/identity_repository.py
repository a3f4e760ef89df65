from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from shoptrack.app.repositories.identity_repository import IIdentityRepository
from shoptrack.domain.entities import Identity, Tenant, UserProfile


class IdentityRepository(IIdentityRepository):
    """Identity repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, identity_id: UUID) -> Optional[Identity]:
        """Get identity by ID"""
        stmt = select(Identity).where(Identity.id == identity_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[Identity]:
        """Get identity by email address"""
        stmt = select(Identity).where(Identity.email == email.lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, identity: Identity) -> Identity:
        """Create a new identity"""
        identity.email = identity.email.lower()
        self.session.add(identity)
        await self.session.flush()
        await self.session.refresh(identity)
        return identity

    async def update(self, identity: Identity) -> Identity:
        """Update existing identity"""
        self.session.add(identity)
        await self.session.flush()
        await self.session.refresh(identity)
        return identity

    async def delete(self, identity: Identity) -> None:
        """Delete identity together with its profile"""
        await self.session.execute(delete(UserProfile).where(UserProfile.id == identity.id))
        await self.session.execute(
            update(Tenant).where(Tenant.created_by == identity.id).values(created_by=None)
        )
        await self.session.delete(identity)
        await self.session.flush()
