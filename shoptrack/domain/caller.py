"""
Caller Context

The resolved (identity, role, tenant) triple every use case is authorized
against. Resolved once per request and passed explicitly.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from shoptrack.domain.entities.enums import UserRole, UserStatus


class CallerContext(BaseModel):
    """Who is asking, as read from their own profile row"""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    email: str
    role: UserRole
    tenant_id: Optional[UUID] = None
    status: UserStatus = UserStatus.active

    # True when no profile row exists and a least-privileged stand-in was used
    synthesized: bool = False

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.super_admin
