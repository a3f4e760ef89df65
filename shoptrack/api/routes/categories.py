from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from shoptrack.api.error import raise_for_error
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.app.use_cases.categories import (
    CategoriesForSelectUseCase,
    CategoryOption,
    CategoryResponse,
    CategoryStatsResponse,
    CategoryStatsUseCase,
    CreateCategoryCommand,
    CreateCategoryUseCase,
    DeleteCategoryResponse,
    DeleteCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesQuery,
    ListCategoriesUseCase,
    UpdateCategoryCommand,
    UpdateCategoryUseCase,
)
from shoptrack.depends import get_caller, get_unit_of_work
from shoptrack.domain.caller import CallerContext

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[CategoryResponse])
async def list_categories(
    search: Optional[str] = Query(None, description="Matches name or description"),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Categories

    Raises:
        - 403 Forbidden: NO_TENANT_ASSIGNED
    """
    use_case = ListCategoriesUseCase(uow)
    result = await use_case.execute(
        caller, ListCategoriesQuery(search=search, limit=limit, offset=offset)
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/select", status_code=status.HTTP_200_OK, response_model=List[CategoryOption])
async def categories_for_select(
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Categories of the caller's tenant ordered by name"""
    use_case = CategoriesForSelectUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=CategoryStatsResponse)
async def category_stats(
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = CategoryStatsUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{category_id}", status_code=status.HTTP_200_OK, response_model=CategoryResponse)
async def get_category(
    category_id: int,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Category

    Raises:
        - 404 Not Found: NOT_FOUND
    """
    use_case = GetCategoryUseCase(uow)
    result = await use_case.execute(caller, category_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class CreateCategoryRequest(BaseModel):
    """Create category HTTP request payload"""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CategoryResponse)
async def create_category(
    request: CreateCategoryRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Category

    Raises:
        - 403 Forbidden: NO_TENANT_ASSIGNED
        - 422 Unprocessable Entity: VALIDATION_FAILED (duplicate name)
    """
    use_case = CreateCategoryUseCase(uow)
    result = await use_case.execute(caller, CreateCategoryCommand(**request.model_dump()))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateCategoryRequest(BaseModel):
    """Update category HTTP request payload; omitted fields are left unchanged"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


@router.patch("/{category_id}", status_code=status.HTTP_200_OK, response_model=CategoryResponse)
async def update_category(
    category_id: int,
    request: UpdateCategoryRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Category

    Raises:
        - 404 Not Found: NOT_FOUND
        - 422 Unprocessable Entity: VALIDATION_FAILED (duplicate name)
    """
    command = UpdateCategoryCommand(**request.model_dump(exclude_unset=True))

    use_case = UpdateCategoryUseCase(uow)
    result = await use_case.execute(caller, category_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{category_id}", status_code=status.HTTP_200_OK, response_model=DeleteCategoryResponse
)
async def delete_category(
    category_id: int,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Category

    Only empty categories can be deleted.

    Raises:
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: CATEGORY_NOT_EMPTY
    """
    use_case = DeleteCategoryUseCase(uow)
    result = await use_case.execute(caller, category_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
