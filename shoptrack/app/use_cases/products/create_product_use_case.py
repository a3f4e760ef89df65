from shoptrack.app.services.guards import blank_to_none, require_tenant, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Product
from shoptrack.libs.result import Error, Result, Return

from .dtos import CreateProductCommand, ProductResponse
from .validation import check_pricing, resolve_category


class CreateProductUseCase:
    """
    Use case for creating a product.

    Business Rules:
    - Always created in the caller's tenant
    - price > 0, 0 <= cost <= price, stock_quantity >= 0 (VALIDATION_FAILED)
    - The category, when given, must belong to the caller's tenant
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, command: CreateProductCommand
    ) -> Result[ProductResponse]:
        """
        Execute create product use case.

        Args:
            caller: Resolved caller
            command: Product details

        Returns:
            Result with ProductResponse, or Error
        """
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        name = command.name.strip()
        if not name:
            return Return.err(Error("VALIDATION_FAILED", "Product name is required"))
        error = check_pricing(command.price, command.cost, command.stock_quantity)
        if error is not None:
            return Return.err(error)

        async with self.uow:
            category = await resolve_category(
                self.uow, caller, caller.tenant_id, command.category_id
            )
            if category.is_err():
                return Return.err(category.error)

            product = Product(
                tenant_id=caller.tenant_id,
                name=name,
                price=command.price,
                cost=command.cost,
                stock_quantity=command.stock_quantity,
                category_id=command.category_id,
                description=blank_to_none(command.description),
            )
            product = await self.uow.products.create(caller, product)
            await self.uow.commit()
            return Return.ok(ProductResponse.build(product, category.value))
