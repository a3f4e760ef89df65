"""
Delete Category Use Case

Categories still holding products cannot be deleted.
"""

import logging

from shoptrack.app.services.guards import not_found_error, require_tenant, translate_store_errors
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.libs.result import Error, Result, Return

from .dtos import DeleteCategoryResponse

logger = logging.getLogger(__name__)


class DeleteCategoryUseCase:
    """
    Use case for deleting a category.

    Business Rules:
    - Only categories of the caller's tenant (NOT_FOUND otherwise)
    - Products of the caller's tenant referencing the category are counted
      first; any at all fails with CATEGORY_NOT_EMPTY carrying the count
    - An empty category is deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, category_id: int) -> Result[DeleteCategoryResponse]:
        """
        Execute delete category use case.

        Args:
            caller: Resolved caller
            category_id: Category to delete

        Returns:
            Result with DeleteCategoryResponse, or Error
        """
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        async with self.uow:
            category = await self.uow.categories.get_visible(caller, caller.tenant_id, category_id)
            if category is None:
                return Return.err(not_found_error("Category"))

            product_count = await self.uow.products.count_by_category(
                caller, caller.tenant_id, category_id
            )
            if product_count > 0:
                logger.info(f"Category {category_id} kept: {product_count} product(s) reference it")
                return Return.err(
                    Error(
                        "CATEGORY_NOT_EMPTY",
                        f"Cannot delete category. It contains {product_count} product(s).",
                        details={"product_count": product_count},
                    )
                )

            await self.uow.categories.delete(caller, category)
            await self.uow.commit()
            return Return.ok(DeleteCategoryResponse(status="deleted", message="Category deleted"))
