import asyncio
from uuid import uuid4

import pytest
from sqlalchemy.orm import sessionmaker
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from shoptrack.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from shoptrack.app.use_cases.users import CreateUserCommand, CreateUserUseCase
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserProfile, UserRole


@pytest.mark.asyncio
async def test_concurrent_admissions_never_overfill(engine, create_tenant, create_user):
    """Two simultaneous admissions into the last free seat: at most one wins"""
    tenant_id = await create_tenant(max_users=2)
    await create_user("first@acme.com", tenant_id=tenant_id)
    caller = CallerContext(user_id=uuid4(), email="root@platform.com", role=UserRole.super_admin)
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def admit(email):
        async with Session() as session:
            use_case = CreateUserUseCase(SqlAlchemyUnitOfWork(session))
            return await use_case.execute(
                caller,
                CreateUserCommand(email=email, password="SecurePass123!", tenant_id=tenant_id),
            )

    results = await asyncio.gather(admit("a@acme.com"), admit("b@acme.com"))

    winners = [r for r in results if r.is_ok()]
    losers = [r for r in results if r.is_err()]
    assert len(winners) == 1
    assert losers[0].error.code in ("TENANT_AT_CAPACITY", "STORE_ERROR")

    async with Session() as session:
        count = (
            await session.exec(
                select(func.count()).select_from(UserProfile).where(UserProfile.tenant_id == tenant_id)
            )
        ).one()
    assert count == 2
