"""
Category Use Cases

CRUD and statistics for the product categories of the caller's tenant.
"""

from typing import List

from shoptrack.app.services.guards import (
    blank_to_none,
    not_found_error,
    page_window,
    require_tenant,
    translate_store_errors,
)
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Category
from shoptrack.domain.policy import Resource, changed_values, check_update
from shoptrack.libs.result import Error, Result, Return

from .dtos import (
    CategoryOption,
    CategoryResponse,
    CategoryStatsResponse,
    CreateCategoryCommand,
    ListCategoriesQuery,
    UpdateCategoryCommand,
)

SELECT_LIMIT = 100


def duplicate_name_error(name: str) -> Error:
    return Error("VALIDATION_FAILED", f"A category named '{name}' already exists")


class ListCategoriesUseCase:
    """
    Use case for listing categories.

    Business Rules:
    - Only categories of the caller's tenant
    - Search matches name or description, case-insensitive
    - Newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, query: ListCategoriesQuery
    ) -> Result[List[CategoryResponse]]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)
        limit, offset = page_window(query.limit, query.offset)

        async with self.uow:
            categories = await self.uow.categories.list_visible(
                caller, caller.tenant_id, search=query.search, limit=limit, offset=offset
            )
            return Return.ok([CategoryResponse.model_validate(c) for c in categories])


class CategoriesForSelectUseCase:
    """Categories of the caller's tenant ordered by name, for selection lists"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext) -> Result[List[CategoryOption]]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        async with self.uow:
            categories = await self.uow.categories.list_visible(
                caller, caller.tenant_id, limit=SELECT_LIMIT, order_by_name=True
            )
            return Return.ok([CategoryOption.model_validate(c) for c in categories])


class GetCategoryUseCase:
    """Use case for reading one category of the caller's tenant"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, category_id: int) -> Result[CategoryResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        async with self.uow:
            category = await self.uow.categories.get_visible(caller, caller.tenant_id, category_id)
            if category is None:
                return Return.err(not_found_error("Category"))
            return Return.ok(CategoryResponse.model_validate(category))


class CreateCategoryUseCase:
    """
    Use case for creating a category.

    Business Rules:
    - Always created in the caller's tenant
    - Name is unique within the tenant (VALIDATION_FAILED)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, command: CreateCategoryCommand
    ) -> Result[CategoryResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)
        name = command.name.strip()
        if not name:
            return Return.err(Error("VALIDATION_FAILED", "Category name is required"))

        async with self.uow:
            if await self.uow.categories.get_by_name(caller, caller.tenant_id, name) is not None:
                return Return.err(duplicate_name_error(name))

            category = Category(
                tenant_id=caller.tenant_id,
                name=name,
                description=blank_to_none(command.description),
            )
            category = await self.uow.categories.create(caller, category)
            await self.uow.commit()
            return Return.ok(CategoryResponse.model_validate(category))


class UpdateCategoryUseCase:
    """Use case for renaming or describing a category of the caller's tenant"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, category_id: int, command: UpdateCategoryCommand
    ) -> Result[CategoryResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        requested = command.model_dump(exclude_unset=True)
        if "name" in requested:
            if requested["name"] is None or not requested["name"].strip():
                return Return.err(Error("VALIDATION_FAILED", "Category name is required"))
            requested["name"] = requested["name"].strip()
        if "description" in requested:
            requested["description"] = blank_to_none(requested["description"])

        async with self.uow:
            category = await self.uow.categories.get_visible(caller, caller.tenant_id, category_id)
            if category is None:
                return Return.err(not_found_error("Category"))

            changes = changed_values(category, requested)
            if "name" in changes:
                existing = await self.uow.categories.get_by_name(
                    caller, caller.tenant_id, changes["name"]
                )
                if existing is not None:
                    return Return.err(duplicate_name_error(changes["name"]))

            denial = check_update(caller, Resource.categories, category, changes)
            if denial is not None:
                return Return.err(denial)

            category = await self.uow.categories.update(caller, category, changes)
            await self.uow.commit()
            return Return.ok(CategoryResponse.model_validate(category))


class CategoryStatsUseCase:
    """Total, used and empty category counts of the caller's tenant"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext) -> Result[CategoryStatsResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        async with self.uow:
            total = await self.uow.categories.count_visible(caller, caller.tenant_id)
            used = await self.uow.categories.count_with_products(caller, caller.tenant_id)
            return Return.ok(
                CategoryStatsResponse(
                    total_categories=total,
                    categories_with_products=used,
                    empty_categories=total - used,
                )
            )
