"""
Product Use Cases

Reads, stock updates and inventory statistics for the caller's tenant.
"""

from decimal import Decimal
from typing import Dict, List

from config import ApplicationConfig
from shoptrack.app.services.guards import (
    not_found_error,
    page_window,
    require_tenant,
    translate_store_errors,
)
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.libs.result import Error, Result, Return

from .dtos import DeleteProductResponse, ListProductsQuery, ProductResponse, ProductStatsResponse

UNCATEGORIZED = "Uncategorized"


class ListProductsUseCase:
    """
    Use case for listing products with their category.

    Business Rules:
    - Only products of the caller's tenant
    - Search matches name or description, case-insensitive
    - low_stock keeps products at or below the low stock threshold
    - Newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, query: ListProductsQuery
    ) -> Result[List[ProductResponse]]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)
        limit, offset = page_window(query.limit, query.offset)

        async with self.uow:
            products = await self.uow.products.list_visible(
                caller,
                caller.tenant_id,
                search=query.search,
                category_id=query.category_id,
                max_stock=ApplicationConfig.LOW_STOCK_THRESHOLD if query.low_stock else None,
                limit=limit,
                offset=offset,
            )
            return Return.ok([ProductResponse.build(p, p.category) for p in products])


class GetProductUseCase:
    """Use case for reading one product of the caller's tenant"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, product_id: int) -> Result[ProductResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        async with self.uow:
            product = await self.uow.products.get_visible(caller, caller.tenant_id, product_id)
            if product is None:
                return Return.err(not_found_error("Product"))

            category = None
            if product.category_id is not None:
                category = await self.uow.categories.get_visible(
                    caller, caller.tenant_id, product.category_id
                )
            return Return.ok(ProductResponse.build(product, category))


class UpdateStockUseCase:
    """
    Use case for setting a product's stock quantity.

    Business Rules:
    - stock_quantity >= 0
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, product_id: int, stock_quantity: int
    ) -> Result[ProductResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)
        if stock_quantity < 0:
            return Return.err(Error("VALIDATION_FAILED", "Stock quantity cannot be negative"))

        async with self.uow:
            product = await self.uow.products.get_visible(caller, caller.tenant_id, product_id)
            if product is None:
                return Return.err(not_found_error("Product"))

            product = await self.uow.products.update(
                caller, product, {"stock_quantity": stock_quantity}
            )
            category = None
            if product.category_id is not None:
                category = await self.uow.categories.get_visible(
                    caller, caller.tenant_id, product.category_id
                )
            await self.uow.commit()
            return Return.ok(ProductResponse.build(product, category))


class DeleteProductUseCase:
    """Use case for deleting a product of the caller's tenant"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, product_id: int) -> Result[DeleteProductResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        async with self.uow:
            product = await self.uow.products.get_visible(caller, caller.tenant_id, product_id)
            if product is None:
                return Return.err(not_found_error("Product"))

            await self.uow.products.delete(caller, product)
            await self.uow.commit()
            return Return.ok(DeleteProductResponse(status="deleted", message="Product deleted"))


class ProductStatsUseCase:
    """
    Inventory figures of the caller's tenant.

    total_value is the sum of price * stock_quantity; products without a
    category are counted under "Uncategorized".
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext) -> Result[ProductStatsResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        async with self.uow:
            products = await self.uow.products.list_visible(caller, caller.tenant_id, limit=None)

            threshold = ApplicationConfig.LOW_STOCK_THRESHOLD
            by_category: Dict[str, int] = {}
            for product in products:
                name = product.category.name if product.category is not None else UNCATEGORIZED
                by_category[name] = by_category.get(name, 0) + 1

            total = len(products)
            price_sum = sum((p.price for p in products), Decimal("0"))
            return Return.ok(
                ProductStatsResponse(
                    total_products=total,
                    low_stock_products=sum(1 for p in products if p.stock_quantity <= threshold),
                    out_of_stock_products=sum(1 for p in products if p.stock_quantity == 0),
                    total_value=sum((p.price * p.stock_quantity for p in products), Decimal("0")),
                    average_price=(price_sum / total).quantize(Decimal("0.01")) if total else Decimal("0"),
                    products_by_category=by_category,
                )
            )
