from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from shoptrack.api.error import raise_for_error
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.app.use_cases.products import (
    CreateProductCommand,
    CreateProductUseCase,
    DeleteProductResponse,
    DeleteProductUseCase,
    GetProductUseCase,
    ListProductsQuery,
    ListProductsUseCase,
    ProductResponse,
    ProductStatsResponse,
    ProductStatsUseCase,
    UpdateProductCommand,
    UpdateProductUseCase,
    UpdateStockUseCase,
)
from shoptrack.depends import get_caller, get_unit_of_work
from shoptrack.domain.caller import CallerContext

router = APIRouter(prefix="/products", tags=["Products"])


async def _list_products(caller: CallerContext, uow: UnitOfWork, query: ListProductsQuery):
    use_case = ListProductsUseCase(uow)
    result = await use_case.execute(caller, query)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=List[ProductResponse])
async def list_products(
    search: Optional[str] = Query(None, description="Matches name or description"),
    category_id: Optional[int] = Query(None),
    low_stock: bool = Query(False),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Products

    Products of the caller's tenant with their category inline.

    Raises:
        - 403 Forbidden: NO_TENANT_ASSIGNED
    """
    query = ListProductsQuery(
        search=search,
        category_id=category_id,
        low_stock=low_stock,
        limit=limit,
        offset=offset,
    )
    return await _list_products(caller, uow, query)


@router.get("/low-stock", status_code=status.HTTP_200_OK, response_model=List[ProductResponse])
async def low_stock_products(
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Products at or below the low stock threshold"""
    query = ListProductsQuery(low_stock=True, limit=limit, offset=offset)
    return await _list_products(caller, uow, query)


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=ProductStatsResponse)
async def product_stats(
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Inventory totals, stock alerts and per-category counts"""
    use_case = ProductStatsUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{product_id}", status_code=status.HTTP_200_OK, response_model=ProductResponse)
async def get_product(
    product_id: int,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Product

    Raises:
        - 404 Not Found: NOT_FOUND
    """
    use_case = GetProductUseCase(uow)
    result = await use_case.execute(caller, product_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class CreateProductRequest(BaseModel):
    """Create product HTTP request payload"""

    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal
    cost: Decimal = Decimal("0")
    stock_quantity: int = 0
    category_id: Optional[int] = None
    description: Optional[str] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProductResponse)
async def create_product(
    request: CreateProductRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Product

    Raises:
        - 403 Forbidden: NO_TENANT_ASSIGNED
        - 422 Unprocessable Entity: VALIDATION_FAILED (pricing, stock or category)
    """
    use_case = CreateProductUseCase(uow)
    result = await use_case.execute(caller, CreateProductCommand(**request.model_dump()))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateProductRequest(BaseModel):
    """Update product HTTP request payload; omitted fields are left unchanged"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[Decimal] = None
    cost: Optional[Decimal] = None
    stock_quantity: Optional[int] = None
    category_id: Optional[int] = None
    description: Optional[str] = None


@router.patch("/{product_id}", status_code=status.HTTP_200_OK, response_model=ProductResponse)
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Product

    Pricing rules are checked against the product as it would be stored.

    Raises:
        - 404 Not Found: NOT_FOUND
        - 422 Unprocessable Entity: VALIDATION_FAILED
    """
    command = UpdateProductCommand(**request.model_dump(exclude_unset=True))

    use_case = UpdateProductUseCase(uow)
    result = await use_case.execute(caller, product_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateStockRequest(BaseModel):
    """New stock level"""

    stock_quantity: int


@router.patch(
    "/{product_id}/stock", status_code=status.HTTP_200_OK, response_model=ProductResponse
)
async def update_stock(
    product_id: int,
    request: UpdateStockRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Stock

    Raises:
        - 404 Not Found: NOT_FOUND
        - 422 Unprocessable Entity: VALIDATION_FAILED (negative stock)
    """
    use_case = UpdateStockUseCase(uow)
    result = await use_case.execute(caller, product_id, request.stock_quantity)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{product_id}", status_code=status.HTTP_200_OK, response_model=DeleteProductResponse
)
async def delete_product(
    product_id: int,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Product

    Raises:
        - 404 Not Found: NOT_FOUND
    """
    use_case = DeleteProductUseCase(uow)
    result = await use_case.execute(caller, product_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
