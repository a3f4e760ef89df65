"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shoptrack.app.use_cases.users.dtos import UserResponse


# ============================================================================
# Command DTOs
# ============================================================================


class SignUpCommand(BaseModel):
    """
    Sign-up command - represents validated self-service signup intent

    Created by API layer after request validation passes.
    """

    email: str
    password: str
    full_name: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class SessionResponse(BaseModel):
    """Bearer session issued on sign-in"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int


class SignUpResponse(BaseModel):
    """Response for sign-up use case"""

    user: UserResponse
    session: SessionResponse


class IdentityResponse(BaseModel):
    """What the session provider knows about the signed-in person"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    last_sign_in_at: Optional[datetime] = None
