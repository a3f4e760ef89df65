"""
Product Entity

A sellable item of one tenant.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, Numeric
from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from shoptrack.domain.base import utcnow

if TYPE_CHECKING:
    from .category import Category


class Product(SQLModel, table=True):
    """
    Product entity.

    Business Rules:
    - price > 0
    - 0 <= cost <= price
    - stock_quantity >= 0
    - category_id, when set, points at a category of the same tenant
    """

    __tablename__ = "products"

    id: Optional[int] = Field(default=None, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, ondelete="CASCADE")

    name: str = Field(max_length=255)
    price: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    cost: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(12, 2), nullable=False))
    stock_quantity: int = Field(default=0)
    category_id: Optional[int] = Field(
        default=None, foreign_key="categories.id", ondelete="SET NULL"
    )
    description: Optional[str] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    category: Optional["Category"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_products_price_positive"),
        CheckConstraint("cost >= 0", name="ck_products_cost_non_negative"),
        CheckConstraint("cost <= price", name="ck_products_cost_within_price"),
        CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),
        Index("idx_products_tenant_id", "tenant_id"),
        Index("idx_products_category_id", "category_id"),
        Index("idx_products_created_at", "created_at"),
    )
