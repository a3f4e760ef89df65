from shoptrack.app.services.guards import (
    blank_to_none,
    not_found_error,
    require_tenant,
    translate_store_errors,
)
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.policy import Resource, changed_values, check_update
from shoptrack.libs.result import Error, Result, Return

from .dtos import ProductResponse, UpdateProductCommand
from .validation import check_pricing, resolve_category

# Explicit null clears these; for the rest null means "leave unchanged"
NULLABLE_FIELDS = ("category_id", "description")


class UpdateProductUseCase:
    """
    Use case for updating a product.

    Business Rules:
    - Only products of the caller's tenant
    - Pricing rules are checked on the row as it would be stored, so a
      cost change alone can still fail against the current price
    - A failed validation leaves the stored row unchanged
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, product_id: int, command: UpdateProductCommand
    ) -> Result[ProductResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        requested = {
            key: value
            for key, value in command.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS
        }
        if "name" in requested:
            requested["name"] = requested["name"].strip()
            if not requested["name"]:
                return Return.err(Error("VALIDATION_FAILED", "Product name is required"))
        if "description" in requested:
            requested["description"] = blank_to_none(requested["description"])

        async with self.uow:
            product = await self.uow.products.get_visible(caller, caller.tenant_id, product_id)
            if product is None:
                return Return.err(not_found_error("Product"))

            changes = changed_values(product, requested)

            error = check_pricing(
                changes.get("price", product.price),
                changes.get("cost", product.cost),
                changes.get("stock_quantity", product.stock_quantity),
            )
            if error is not None:
                return Return.err(error)

            category = await resolve_category(
                self.uow, caller, caller.tenant_id, changes.get("category_id", product.category_id)
            )
            if category.is_err():
                return Return.err(category.error)

            denial = check_update(caller, Resource.products, product, changes)
            if denial is not None:
                return Return.err(denial)

            product = await self.uow.products.update(caller, product, changes)
            await self.uow.commit()
            return Return.ok(ProductResponse.build(product, category.value))
