"""
Unit tests for category use cases, including the deletion guard.
"""

import pytest
from unittest.mock import AsyncMock

from shoptrack.app.use_cases.categories import (
    CategoryStatsUseCase,
    CreateCategoryCommand,
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
)
from shoptrack.domain.entities import Category
from shoptrack.domain.policy import PolicyViolation
from shoptrack.libs.result import Error


@pytest.mark.asyncio
async def test_delete_category_with_products(mock_uow, tenant_admin, tenant_id):
    category = Category(id=5, tenant_id=tenant_id, name="Tools")
    mock_uow.categories.get_visible = AsyncMock(return_value=category)
    mock_uow.products.count_by_category = AsyncMock(return_value=3)
    mock_uow.categories.delete = AsyncMock()

    result = await DeleteCategoryUseCase(mock_uow).execute(tenant_admin, 5)

    assert result.is_err()
    assert result.error.code == "CATEGORY_NOT_EMPTY"
    assert result.error.message == "Cannot delete category. It contains 3 product(s)."
    assert result.error.details == {"product_count": 3}
    mock_uow.categories.delete.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_empty_category(mock_uow, tenant_user, tenant_id):
    category = Category(id=5, tenant_id=tenant_id, name="Tools")
    mock_uow.categories.get_visible = AsyncMock(return_value=category)
    mock_uow.products.count_by_category = AsyncMock(return_value=0)
    mock_uow.categories.delete = AsyncMock()

    result = await DeleteCategoryUseCase(mock_uow).execute(tenant_user, 5)

    assert result.is_ok()
    assert result.value.status == "deleted"
    mock_uow.categories.delete.assert_awaited_once_with(tenant_user, category)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_delete_hidden_category(mock_uow, tenant_user):
    mock_uow.categories.get_visible = AsyncMock(return_value=None)
    mock_uow.products.count_by_category = AsyncMock()

    result = await DeleteCategoryUseCase(mock_uow).execute(tenant_user, 5)

    assert result.is_err()
    assert result.error.code == "NOT_FOUND"
    mock_uow.products.count_by_category.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_duplicate_category(mock_uow, tenant_user, tenant_id):
    existing = Category(id=1, tenant_id=tenant_id, name="Tools")
    mock_uow.categories.get_by_name = AsyncMock(return_value=existing)
    mock_uow.categories.create = AsyncMock()

    result = await CreateCategoryUseCase(mock_uow).execute(
        tenant_user, CreateCategoryCommand(name="  Tools ")
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"
    mock_uow.categories.get_by_name.assert_awaited_once_with(tenant_user, tenant_id, "Tools")
    mock_uow.categories.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_store_policy_violation_becomes_error(mock_uow, tenant_user):
    mock_uow.categories.get_by_name = AsyncMock(return_value=None)
    mock_uow.categories.create = AsyncMock(
        side_effect=PolicyViolation(Error("INSUFFICIENT_ROLE", "Row belongs to another tenant"))
    )

    result = await CreateCategoryUseCase(mock_uow).execute(
        tenant_user, CreateCategoryCommand(name="Tools")
    )

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_category_stats(mock_uow, tenant_user):
    mock_uow.categories.count_visible = AsyncMock(return_value=4)
    mock_uow.categories.count_with_products = AsyncMock(return_value=1)

    result = await CategoryStatsUseCase(mock_uow).execute(tenant_user)

    assert result.is_ok()
    assert result.value.total_categories == 4
    assert result.value.categories_with_products == 1
    assert result.value.empty_categories == 3
