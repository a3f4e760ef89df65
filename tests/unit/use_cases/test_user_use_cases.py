"""
Unit tests for user creation, updates and caller resolution.
"""

import pytest
from uuid import uuid4
from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError

from shoptrack.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    ResolveCallerUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
)
from shoptrack.domain.entities import Identity, Tenant, UserProfile, UserRole, UserStatus


async def _apply(caller, row, changes):
    for key, value in changes.items():
        setattr(row, key, value)
    return row


def _returns_row(*args):
    return args[-1]


# ============================================================================
# ResolveCallerUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_resolve_caller_reads_profile(mock_uow, tenant_id):
    identity = Identity(id=uuid4(), email="ada@example.com", password_hash="x")
    profile = UserProfile(
        id=identity.id, email=identity.email, role=UserRole.tenant_admin, tenant_id=tenant_id
    )
    mock_uow.identities.get_by_id = AsyncMock(return_value=identity)
    mock_uow.profiles.get_by_id = AsyncMock(return_value=profile)

    result = await ResolveCallerUseCase(mock_uow).execute(identity.id)

    assert result.is_ok()
    assert result.value.role == UserRole.tenant_admin
    assert result.value.tenant_id == tenant_id
    assert result.value.synthesized is False


@pytest.mark.asyncio
async def test_resolve_caller_without_identity(mock_uow):
    result = await ResolveCallerUseCase(mock_uow).execute(None)

    assert result.is_err()
    assert result.error.code == "NOT_AUTHENTICATED"


@pytest.mark.asyncio
async def test_resolve_caller_missing_profile_fallback(mock_uow):
    identity = Identity(id=uuid4(), email="new@example.com", password_hash="x")
    mock_uow.identities.get_by_id = AsyncMock(return_value=identity)
    mock_uow.profiles.get_by_id = AsyncMock(return_value=None)

    result = await ResolveCallerUseCase(mock_uow, allow_missing_profile_fallback=True).execute(
        identity.id
    )

    assert result.is_ok()
    assert result.value.role == UserRole.tenant_user
    assert result.value.tenant_id is None
    assert result.value.synthesized is True
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_resolve_caller_missing_profile_strict(mock_uow):
    identity = Identity(id=uuid4(), email="new@example.com", password_hash="x")
    mock_uow.identities.get_by_id = AsyncMock(return_value=identity)
    mock_uow.profiles.get_by_id = AsyncMock(return_value=None)

    result = await ResolveCallerUseCase(mock_uow, allow_missing_profile_fallback=False).execute(
        identity.id
    )

    assert result.is_err()
    assert result.error.code == "PROFILE_MISSING"


@pytest.mark.asyncio
async def test_resolve_caller_suspended(mock_uow, tenant_id):
    identity = Identity(id=uuid4(), email="ada@example.com", password_hash="x")
    profile = UserProfile(
        id=identity.id,
        email=identity.email,
        role=UserRole.tenant_user,
        tenant_id=tenant_id,
        status=UserStatus.suspended,
    )
    mock_uow.identities.get_by_id = AsyncMock(return_value=identity)
    mock_uow.profiles.get_by_id = AsyncMock(return_value=profile)

    result = await ResolveCallerUseCase(mock_uow).execute(identity.id)

    assert result.is_err()
    assert result.error.code == "USER_INACTIVE"


@pytest.mark.asyncio
async def test_resolve_caller_store_failure(mock_uow):
    mock_uow.identities.get_by_id = AsyncMock(
        side_effect=OperationalError("SELECT", {}, Exception("locked"))
    )

    result = await ResolveCallerUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "STORE_ERROR"


# ============================================================================
# CreateUserUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_tenant_user_cannot_create_users(mock_uow, tenant_user):
    result = await CreateUserUseCase(mock_uow).execute(
        tenant_user, CreateUserCommand(email="x@example.com", password="Password123")
    )

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_tenant_admin_cannot_create_admins(mock_uow, tenant_admin):
    result = await CreateUserUseCase(mock_uow).execute(
        tenant_admin,
        CreateUserCommand(
            email="x@example.com", password="Password123", role=UserRole.tenant_admin
        ),
    )

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_tenant_admin_creates_into_own_tenant(mock_uow, tenant_admin, tenant_id):
    tenant = Tenant(id=tenant_id, name="Acme", max_users=5)
    mock_uow.identities.get_by_email = AsyncMock(return_value=None)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.profiles.count_by_tenant = AsyncMock(return_value=1)
    mock_uow.identities.create = AsyncMock(side_effect=_returns_row)
    mock_uow.profiles.create = AsyncMock(side_effect=_returns_row)

    result = await CreateUserUseCase(mock_uow).execute(
        tenant_admin,
        CreateUserCommand(email="New@Example.com", password="Password123", tenant_id=uuid4()),
    )

    assert result.is_ok()
    assert result.value.tenant_id == tenant_id
    assert result.value.email == "new@example.com"
    assert result.value.tenant.name == "Acme"
    profile = mock_uow.profiles.create.await_args[0][1]
    assert profile.created_by == tenant_admin.user_id
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_user_full_tenant(mock_uow, super_admin, tenant_id):
    tenant = Tenant(id=tenant_id, name="Acme", max_users=2)
    mock_uow.identities.get_by_email = AsyncMock(return_value=None)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.profiles.count_by_tenant = AsyncMock(return_value=2)
    mock_uow.identities.create = AsyncMock()

    result = await CreateUserUseCase(mock_uow).execute(
        super_admin,
        CreateUserCommand(email="x@example.com", password="Password123", tenant_id=tenant_id),
    )

    assert result.is_err()
    assert result.error.code == "TENANT_AT_CAPACITY"
    mock_uow.identities.create.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_user_duplicate_email(mock_uow, super_admin):
    existing = Identity(id=uuid4(), email="x@example.com", password_hash="x")
    mock_uow.identities.get_by_email = AsyncMock(return_value=existing)

    result = await CreateUserUseCase(mock_uow).execute(
        super_admin,
        CreateUserCommand(email="X@example.com", password="Password123", role=UserRole.super_admin),
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_create_tenant_user_requires_tenant(mock_uow, super_admin):
    result = await CreateUserUseCase(mock_uow).execute(
        super_admin, CreateUserCommand(email="x@example.com", password="Password123")
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"


# ============================================================================
# UpdateUserUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_tenant_user_cannot_promote_self(mock_uow, tenant_user, tenant_id):
    profile = UserProfile(
        id=tenant_user.user_id,
        email="self@example.com",
        role=UserRole.tenant_user,
        tenant_id=tenant_id,
    )
    mock_uow.profiles.get_visible = AsyncMock(return_value=profile)
    mock_uow.profiles.update = AsyncMock()

    result = await UpdateUserUseCase(mock_uow).execute(
        tenant_user, profile.id, UpdateUserCommand(role=UserRole.super_admin)
    )

    assert result.is_err()
    assert result.error.code == "SELF_PRIVILEGE_ESCALATION"
    assert profile.role == UserRole.tenant_user
    mock_uow.profiles.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_resubmitting_own_role_is_allowed(mock_uow, tenant_user, tenant_id):
    profile = UserProfile(
        id=tenant_user.user_id,
        email="self@example.com",
        role=UserRole.tenant_user,
        tenant_id=tenant_id,
    )
    tenant = Tenant(id=tenant_id, name="Acme")
    mock_uow.profiles.get_visible = AsyncMock(return_value=profile)
    mock_uow.profiles.update = AsyncMock(side_effect=_apply)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)

    result = await UpdateUserUseCase(mock_uow).execute(
        tenant_user,
        profile.id,
        UpdateUserCommand(role=UserRole.tenant_user, full_name="Ada Lovelace"),
    )

    assert result.is_ok()
    assert result.value.full_name == "Ada Lovelace"
    assert mock_uow.profiles.update.await_args[0][2] == {"full_name": "Ada Lovelace"}


@pytest.mark.asyncio
async def test_unassigned_user_renames_self(mock_uow, make_caller):
    caller = make_caller(UserRole.tenant_user, tenant_id=None)
    profile = UserProfile(id=caller.user_id, email="self@example.com", role=UserRole.tenant_user)
    mock_uow.profiles.get_visible = AsyncMock(return_value=profile)
    mock_uow.profiles.update = AsyncMock(side_effect=_apply)

    result = await UpdateUserUseCase(mock_uow).execute(
        caller, profile.id, UpdateUserCommand(full_name="Grace")
    )

    assert result.is_ok()
    assert result.value.tenant is None


@pytest.mark.asyncio
async def test_reassignment_checks_target_capacity(mock_uow, super_admin, tenant_id):
    profile = UserProfile(
        id=uuid4(), email="u@example.com", role=UserRole.tenant_user, tenant_id=uuid4()
    )
    full = Tenant(id=tenant_id, name="Full", max_users=1)
    mock_uow.profiles.get_visible = AsyncMock(return_value=profile)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=full)
    mock_uow.profiles.count_by_tenant = AsyncMock(return_value=1)
    mock_uow.profiles.update = AsyncMock()

    result = await UpdateUserUseCase(mock_uow).execute(
        super_admin, profile.id, UpdateUserCommand(tenant_id=tenant_id)
    )

    assert result.is_err()
    assert result.error.code == "TENANT_AT_CAPACITY"
    mock_uow.profiles.update.assert_not_awaited()
