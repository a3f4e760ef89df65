"""
ShopTrack Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import TenantStatus, UserRole, UserStatus

# Export all entities
from .identity import Identity
from .tenant import Tenant
from .user_profile import UserProfile
from .category import Category
from .customer import Customer
from .product import Product

__all__ = [
    # Enums
    "UserRole",
    "UserStatus",
    "TenantStatus",
    # Entities
    "Identity",
    "Tenant",
    "UserProfile",
    "Category",
    "Customer",
    "Product",
]
