from dataclasses import dataclass
from typing import Optional
from uuid import UUID

import bcrypt
import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import shoptrack.domain.entities  # noqa: F401
from shoptrack.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from shoptrack.api.utils.jwt import create_access_token
from shoptrack.depends import get_unit_of_work
from shoptrack.domain.entities import Identity, Tenant, UserProfile, UserRole, UserStatus

TEST_PASSWORD = "SecurePass123!"


@dataclass
class SeededUser:
    id: UUID
    email: str
    role: UserRole
    tenant_id: Optional[UUID]
    token: str

    @property
    def headers(self):
        return {"Authorization": f"Bearer {self.token}"}


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from shoptrack.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_tenant(db_session):
    """Insert a tenant directly and return its id"""

    async def _create(name="Acme", max_users=10) -> UUID:
        tenant = Tenant(name=name, max_users=max_users)
        tenant_id = tenant.id
        db_session.add(tenant)
        await db_session.commit()
        return tenant_id

    return _create


@pytest.fixture
def create_user(db_session):
    """Insert an identity with its profile and return it with a valid token"""
    password_hash = bcrypt.hashpw(TEST_PASSWORD.encode(), bcrypt.gensalt(4)).decode()

    async def _create(
        email,
        role=UserRole.tenant_user,
        tenant_id=None,
        status=UserStatus.active,
        with_profile=True,
    ) -> SeededUser:
        identity = Identity(email=email, password_hash=password_hash)
        identity_id = identity.id
        db_session.add(identity)
        if with_profile:
            db_session.add(
                UserProfile(
                    id=identity_id,
                    email=email,
                    role=role,
                    tenant_id=tenant_id,
                    full_name=email,
                    status=status,
                )
            )
        await db_session.commit()
        return SeededUser(
            id=identity_id,
            email=email,
            role=role,
            tenant_id=tenant_id,
            token=create_access_token(identity_id, email),
        )

    return _create
