"""
Unit tests for product creation and update validation.
"""

import pytest
from decimal import Decimal
from uuid import uuid4
from unittest.mock import AsyncMock

from shoptrack.app.use_cases.products import (
    CreateProductCommand,
    CreateProductUseCase,
    UpdateProductCommand,
    UpdateProductUseCase,
)
from shoptrack.domain.entities import Category, Product


def _returns_row(caller, row, *args):
    if getattr(row, "id", None) is None:
        row.id = 1
    return row


@pytest.mark.asyncio
async def test_create_product_cost_above_price(mock_uow, tenant_user):
    mock_uow.products.create = AsyncMock()

    result = await CreateProductUseCase(mock_uow).execute(
        tenant_user, CreateProductCommand(name="Widget", price=Decimal("10"), cost=Decimal("12"))
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"
    assert result.error.message == "Cost cannot be greater than price"
    mock_uow.products.create.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "price,cost,stock,message",
    [
        (Decimal("0"), Decimal("0"), 0, "Price must be greater than 0"),
        (Decimal("5"), Decimal("-1"), 0, "Cost cannot be negative"),
        (Decimal("5"), Decimal("1"), -3, "Stock quantity cannot be negative"),
    ],
)
async def test_create_product_rejects_bad_numbers(mock_uow, tenant_user, price, cost, stock, message):
    result = await CreateProductUseCase(mock_uow).execute(
        tenant_user,
        CreateProductCommand(name="Widget", price=price, cost=cost, stock_quantity=stock),
    )

    assert result.is_err()
    assert result.error.message == message


@pytest.mark.asyncio
async def test_create_product_cost_equal_price(mock_uow, tenant_user, tenant_id):
    mock_uow.products.create = AsyncMock(side_effect=_returns_row)

    result = await CreateProductUseCase(mock_uow).execute(
        tenant_user, CreateProductCommand(name=" Widget ", price=Decimal("10"), cost=Decimal("10"))
    )

    assert result.is_ok()
    product = mock_uow.products.create.await_args[0][1]
    assert product.tenant_id == tenant_id
    assert product.name == "Widget"
    assert result.value.category is None
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_product_foreign_category(mock_uow, tenant_user):
    mock_uow.categories.get_visible = AsyncMock(return_value=None)
    mock_uow.products.create = AsyncMock()

    result = await CreateProductUseCase(mock_uow).execute(
        tenant_user, CreateProductCommand(name="Widget", price=Decimal("3"), category_id=42)
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"
    mock_uow.products.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_product_without_tenant(mock_uow, make_caller):
    caller = make_caller(tenant_id=None)

    result = await CreateProductUseCase(mock_uow).execute(
        caller, CreateProductCommand(name="Widget", price=Decimal("3"))
    )

    assert result.is_err()
    assert result.error.code == "NO_TENANT_ASSIGNED"


@pytest.mark.asyncio
async def test_update_product_checks_merged_pricing(mock_uow, tenant_user, tenant_id):
    """Lowering price below the stored cost is rejected"""
    product = Product(
        id=7, tenant_id=tenant_id, name="Widget", price=Decimal("10"), cost=Decimal("8")
    )
    mock_uow.products.get_visible = AsyncMock(return_value=product)
    mock_uow.products.update = AsyncMock()

    result = await UpdateProductUseCase(mock_uow).execute(
        tenant_user, 7, UpdateProductCommand(price=Decimal("5"))
    )

    assert result.is_err()
    assert result.error.message == "Cost cannot be greater than price"
    mock_uow.products.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_product_clears_category(mock_uow, tenant_user, tenant_id):
    product = Product(
        id=7,
        tenant_id=tenant_id,
        name="Widget",
        price=Decimal("10"),
        cost=Decimal("8"),
        category_id=3,
    )
    mock_uow.products.get_visible = AsyncMock(return_value=product)

    async def apply(caller, row, changes):
        for key, value in changes.items():
            setattr(row, key, value)
        return row

    mock_uow.products.update = AsyncMock(side_effect=apply)

    result = await UpdateProductUseCase(mock_uow).execute(
        tenant_user, 7, UpdateProductCommand(category_id=None)
    )

    assert result.is_ok()
    assert mock_uow.products.update.await_args[0][2] == {"category_id": None}
    assert result.value.category_id is None
    assert result.value.category is None


@pytest.mark.asyncio
async def test_update_product_moves_to_own_category(mock_uow, tenant_user, tenant_id):
    product = Product(id=7, tenant_id=tenant_id, name="Widget", price=Decimal("10"))
    category = Category(id=4, tenant_id=tenant_id, name="Tools")
    mock_uow.products.get_visible = AsyncMock(return_value=product)
    mock_uow.categories.get_visible = AsyncMock(return_value=category)
    mock_uow.products.update = AsyncMock(return_value=product)

    result = await UpdateProductUseCase(mock_uow).execute(
        tenant_user, 7, UpdateProductCommand(category_id=4)
    )

    assert result.is_ok()
    assert result.value.category.name == "Tools"
    mock_uow.categories.get_visible.assert_awaited_once_with(tenant_user, tenant_id, 4)


@pytest.mark.asyncio
async def test_update_product_hidden(mock_uow, tenant_user):
    mock_uow.products.get_visible = AsyncMock(return_value=None)

    result = await UpdateProductUseCase(mock_uow).execute(
        tenant_user, 99, UpdateProductCommand(name="Gadget")
    )

    assert result.is_err()
    assert result.error.code == "NOT_FOUND"
