from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import UserRole


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def make_caller():
    def _make(role=UserRole.tenant_user, tenant_id=None, user_id=None):
        return CallerContext(
            user_id=user_id or uuid4(),
            email="caller@example.com",
            role=role,
            tenant_id=tenant_id,
        )

    return _make


@pytest.fixture
def tenant_id():
    return uuid4()


@pytest.fixture
def super_admin(make_caller):
    return make_caller(UserRole.super_admin)


@pytest.fixture
def tenant_admin(make_caller, tenant_id):
    return make_caller(UserRole.tenant_admin, tenant_id)


@pytest.fixture
def tenant_user(make_caller, tenant_id):
    return make_caller(UserRole.tenant_user, tenant_id)
