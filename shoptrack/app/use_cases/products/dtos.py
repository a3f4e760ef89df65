"""
Product Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from shoptrack.domain.entities import Category, Product


class CreateProductCommand(BaseModel):
    """Create product command"""

    name: str
    price: Decimal
    cost: Decimal = Decimal("0")
    stock_quantity: int = 0
    category_id: Optional[int] = None
    description: Optional[str] = None


class UpdateProductCommand(BaseModel):
    """Update product command; only fields explicitly set are applied"""

    name: Optional[str] = None
    price: Optional[Decimal] = None
    cost: Optional[Decimal] = None
    stock_quantity: Optional[int] = None
    category_id: Optional[int] = None
    description: Optional[str] = None


class ListProductsQuery(BaseModel):
    """Filters for listing products"""

    search: Optional[str] = None
    category_id: Optional[int] = None
    low_stock: bool = False
    limit: Optional[int] = None
    offset: int = 0


class CategorySummary(BaseModel):
    """Category shown inline with a product"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None


class ProductResponse(BaseModel):
    """Product with its category inline"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    tenant_id: UUID
    name: str
    price: Decimal
    cost: Decimal
    stock_quantity: int
    category_id: Optional[int] = None
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    category: Optional[CategorySummary] = None

    @classmethod
    def build(cls, product: Product, category: Optional[Category] = None) -> "ProductResponse":
        """Build from a product; the category is passed in, never lazy-loaded"""
        return cls(
            id=product.id,
            tenant_id=product.tenant_id,
            name=product.name,
            price=product.price,
            cost=product.cost,
            stock_quantity=product.stock_quantity,
            category_id=product.category_id,
            description=product.description,
            created_at=product.created_at,
            updated_at=product.updated_at,
            category=CategorySummary.model_validate(category) if category is not None else None,
        )


class ProductStatsResponse(BaseModel):
    """Inventory figures of the caller's tenant"""

    total_products: int
    low_stock_products: int
    out_of_stock_products: int
    total_value: Decimal
    average_price: Decimal
    products_by_category: Dict[str, int]


class DeleteProductResponse(BaseModel):
    """Response for delete product use case"""

    status: str
    message: str
