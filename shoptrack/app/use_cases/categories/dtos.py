"""
Category Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CreateCategoryCommand(BaseModel):
    """Create category command"""

    name: str
    description: Optional[str] = None


class UpdateCategoryCommand(BaseModel):
    """Update category command; only fields explicitly set are applied"""

    name: Optional[str] = None
    description: Optional[str] = None


class ListCategoriesQuery(BaseModel):
    """Filters for listing categories"""

    search: Optional[str] = None
    limit: Optional[int] = None
    offset: int = 0


class CategoryResponse(BaseModel):
    """Category of the caller's tenant"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    tenant_id: UUID
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CategoryOption(BaseModel):
    """Category entry for selection lists"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CategoryStatsResponse(BaseModel):
    """Category counts of the caller's tenant"""

    total_categories: int
    categories_with_products: int
    empty_categories: int


class DeleteCategoryResponse(BaseModel):
    """Response for delete category use case"""

    status: str
    message: str
