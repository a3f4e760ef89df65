"""
Unit tests for sign-up and sign-in.
"""

from uuid import uuid4
from unittest.mock import AsyncMock

import bcrypt
import pytest

from shoptrack.api.utils.jwt import verify_jwt
from shoptrack.app.use_cases.auth import SignInUseCase, SignUpCommand, SignUpUseCase
from shoptrack.domain.entities import Identity, UserProfile, UserRole, UserStatus


def _identity(password="SecurePass123!"):
    return Identity(
        id=uuid4(),
        email="ada@shop.com",
        password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode(),
    )


@pytest.mark.asyncio
async def test_sign_up_creates_unassigned_tenant_user(mock_uow):
    mock_uow.identities.get_by_email = AsyncMock(return_value=None)
    mock_uow.identities.create = AsyncMock(side_effect=lambda identity: identity)
    mock_uow.profiles.create_unscoped = AsyncMock(side_effect=lambda profile: profile)

    result = await SignUpUseCase(mock_uow).execute(
        SignUpCommand(email="Ada@Shop.com", password="SecurePass123!")
    )

    assert result.is_ok()
    user = result.value.user
    assert user.email == "ada@shop.com"
    assert user.role == UserRole.tenant_user
    assert user.tenant_id is None
    assert user.full_name == "ada@shop.com"

    identity = mock_uow.identities.create.await_args[0][0]
    assert identity.password_hash != "SecurePass123!"
    assert bcrypt.checkpw(b"SecurePass123!", identity.password_hash.encode())

    payload = verify_jwt(result.value.session.access_token)
    assert payload["sub"] == str(identity.id)
    assert "role" not in payload
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_sign_up_existing_email(mock_uow):
    mock_uow.identities.get_by_email = AsyncMock(return_value=_identity())
    mock_uow.identities.create = AsyncMock()

    result = await SignUpUseCase(mock_uow).execute(
        SignUpCommand(email="ada@shop.com", password="SecurePass123!")
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.identities.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_sign_in_records_login(mock_uow):
    identity = _identity()
    profile = UserProfile(id=identity.id, email=identity.email, role=UserRole.tenant_user)
    mock_uow.identities.get_by_email = AsyncMock(return_value=identity)
    mock_uow.identities.update = AsyncMock()
    mock_uow.profiles.get_by_id = AsyncMock(return_value=profile)
    mock_uow.profiles.update_unscoped = AsyncMock()

    result = await SignInUseCase(mock_uow).execute("ada@shop.com", "SecurePass123!")

    assert result.is_ok()
    assert result.value.token_type == "bearer"
    assert identity.last_sign_in_at is not None
    changes = mock_uow.profiles.update_unscoped.await_args[0][1]
    assert changes == {"last_login": identity.last_sign_in_at}
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_sign_in_wrong_password(mock_uow):
    mock_uow.identities.get_by_email = AsyncMock(return_value=_identity())

    result = await SignInUseCase(mock_uow).execute("ada@shop.com", "WrongPass123!")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_sign_in_inactive_profile(mock_uow):
    identity = _identity()
    profile = UserProfile(
        id=identity.id,
        email=identity.email,
        role=UserRole.tenant_user,
        status=UserStatus.inactive,
    )
    mock_uow.identities.get_by_email = AsyncMock(return_value=identity)
    mock_uow.profiles.get_by_id = AsyncMock(return_value=profile)

    result = await SignInUseCase(mock_uow).execute("ada@shop.com", "SecurePass123!")

    assert result.is_err()
    assert result.error.code == "USER_INACTIVE"
