"""
Category Use Cases
"""

from .category_use_cases import (
    CategoriesForSelectUseCase,
    CategoryStatsUseCase,
    CreateCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from .delete_category_use_case import DeleteCategoryUseCase
from .dtos import (
    CategoryOption,
    CategoryResponse,
    CategoryStatsResponse,
    CreateCategoryCommand,
    DeleteCategoryResponse,
    ListCategoriesQuery,
    UpdateCategoryCommand,
)

__all__ = [
    "ListCategoriesUseCase",
    "CategoriesForSelectUseCase",
    "GetCategoryUseCase",
    "CreateCategoryUseCase",
    "UpdateCategoryUseCase",
    "DeleteCategoryUseCase",
    "CategoryStatsUseCase",
    "CreateCategoryCommand",
    "UpdateCategoryCommand",
    "ListCategoriesQuery",
    "CategoryResponse",
    "CategoryOption",
    "CategoryStatsResponse",
    "DeleteCategoryResponse",
]
