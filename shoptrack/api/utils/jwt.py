from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def create_access_token(
    identity_id: UUID, email: str, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token

    Carries only the identity; role and tenant are read from the profile
    on every request.

    Args:
        identity_id: Identity UUID
        email: Identity email
        expires_delta: Token lifetime (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        JWT token string (HS256)
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(UTC)
    payload = {
        "sub": str(identity_id),
        "email": email,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """Decoded claims of a valid, unexpired token that names a subject, else None"""
    try:
        return jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=["HS256"],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError:
        return None


def identity_id_from_token(token: str) -> Optional[UUID]:
    """Subject of a valid token, or None"""
    payload = verify_jwt(token)
    if payload is None:
        return None
    try:
        return UUID(payload["sub"])
    except ValueError:
        return None
