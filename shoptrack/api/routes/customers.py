from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from shoptrack.api.error import raise_for_error
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.app.use_cases.customers import (
    CreateCustomerCommand,
    CreateCustomerUseCase,
    CustomerResponse,
    CustomerStatsResponse,
    CustomerStatsUseCase,
    DeleteCustomerResponse,
    DeleteCustomerUseCase,
    GetCustomerUseCase,
    ListCustomersQuery,
    ListCustomersUseCase,
    UpdateCustomerCommand,
    UpdateCustomerUseCase,
)
from shoptrack.depends import get_caller, get_unit_of_work
from shoptrack.domain.caller import CallerContext

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[CustomerResponse])
async def list_customers(
    search: Optional[str] = Query(None, description="Matches name, email or phone"),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Customers

    Raises:
        - 403 Forbidden: NO_TENANT_ASSIGNED
    """
    use_case = ListCustomersUseCase(uow)
    result = await use_case.execute(
        caller, ListCustomersQuery(search=search, limit=limit, offset=offset)
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=CustomerStatsResponse)
async def customer_stats(
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Customer totals plus new customers this month and this week"""
    use_case = CustomerStatsUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{customer_id}", status_code=status.HTTP_200_OK, response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Customer

    Raises:
        - 404 Not Found: NOT_FOUND
    """
    use_case = GetCustomerUseCase(uow)
    result = await use_case.execute(caller, customer_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class CreateCustomerRequest(BaseModel):
    """Create customer HTTP request payload"""

    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CustomerResponse)
async def create_customer(
    request: CreateCustomerRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Customer

    The customer is created in the caller's tenant.

    Raises:
        - 403 Forbidden: NO_TENANT_ASSIGNED
        - 422 Unprocessable Entity: VALIDATION_FAILED
    """
    use_case = CreateCustomerUseCase(uow)
    result = await use_case.execute(caller, CreateCustomerCommand(**request.model_dump()))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateCustomerRequest(BaseModel):
    """Update customer HTTP request payload; omitted fields are left unchanged"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None


@router.patch("/{customer_id}", status_code=status.HTTP_200_OK, response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    request: UpdateCustomerRequest,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Customer

    Raises:
        - 404 Not Found: NOT_FOUND
    """
    command = UpdateCustomerCommand(**request.model_dump(exclude_unset=True))

    use_case = UpdateCustomerUseCase(uow)
    result = await use_case.execute(caller, customer_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{customer_id}", status_code=status.HTTP_200_OK, response_model=DeleteCustomerResponse
)
async def delete_customer(
    customer_id: int,
    caller: CallerContext = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Customer

    Raises:
        - 404 Not Found: NOT_FOUND
    """
    use_case = DeleteCustomerUseCase(uow)
    result = await use_case.execute(caller, customer_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
