"""
ShopTrack Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Platform-wide role of a user profile"""

    super_admin = "super_admin"
    tenant_admin = "tenant_admin"
    tenant_user = "tenant_user"


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    inactive = "inactive"
    suspended = "suspended"


class TenantStatus(str, Enum):
    """Tenant status"""

    active = "active"
    inactive = "inactive"
    suspended = "suspended"
