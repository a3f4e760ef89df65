"""
Customer Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CreateCustomerCommand(BaseModel):
    """Create customer command; blank optional fields are stored as NULL"""

    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class UpdateCustomerCommand(BaseModel):
    """Update customer command; only fields explicitly set are applied"""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class ListCustomersQuery(BaseModel):
    """Filters for listing customers"""

    search: Optional[str] = None
    limit: Optional[int] = None
    offset: int = 0


class CustomerResponse(BaseModel):
    """Customer of the caller's tenant"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    tenant_id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CustomerStatsResponse(BaseModel):
    """Customer counts of the caller's tenant"""

    total_customers: int
    new_customers_this_month: int
    new_customers_this_week: int


class DeleteCustomerResponse(BaseModel):
    """Response for delete customer use case"""

    status: str
    message: str
