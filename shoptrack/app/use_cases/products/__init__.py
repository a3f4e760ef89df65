"""
Product Use Cases
"""

from .create_product_use_case import CreateProductUseCase
from .dtos import (
    CategorySummary,
    CreateProductCommand,
    DeleteProductResponse,
    ListProductsQuery,
    ProductResponse,
    ProductStatsResponse,
    UpdateProductCommand,
)
from .product_use_cases import (
    DeleteProductUseCase,
    GetProductUseCase,
    ListProductsUseCase,
    ProductStatsUseCase,
    UpdateStockUseCase,
)
from .update_product_use_case import UpdateProductUseCase

__all__ = [
    "ListProductsUseCase",
    "GetProductUseCase",
    "CreateProductUseCase",
    "UpdateProductUseCase",
    "UpdateStockUseCase",
    "DeleteProductUseCase",
    "ProductStatsUseCase",
    "CreateProductCommand",
    "UpdateProductCommand",
    "ListProductsQuery",
    "ProductResponse",
    "CategorySummary",
    "ProductStatsResponse",
    "DeleteProductResponse",
]
