from datetime import timedelta
from uuid import UUID

from config import ApplicationConfig
from shoptrack.api.utils.jwt import create_access_token

from .dtos import SessionResponse


def issue_session(identity_id: UUID, email: str) -> SessionResponse:
    """Sign a fresh access token for an identity"""
    lifetime = timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES)
    return SessionResponse(
        access_token=create_access_token(identity_id, email, lifetime),
        expires_in=int(lifetime.total_seconds()),
    )
