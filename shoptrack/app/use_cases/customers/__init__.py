"""
Customer Use Cases
"""

from .customer_use_cases import (
    CreateCustomerUseCase,
    CustomerStatsUseCase,
    DeleteCustomerUseCase,
    GetCustomerUseCase,
    ListCustomersUseCase,
    UpdateCustomerUseCase,
)
from .dtos import (
    CreateCustomerCommand,
    CustomerResponse,
    CustomerStatsResponse,
    DeleteCustomerResponse,
    ListCustomersQuery,
    UpdateCustomerCommand,
)

__all__ = [
    "ListCustomersUseCase",
    "GetCustomerUseCase",
    "CreateCustomerUseCase",
    "UpdateCustomerUseCase",
    "DeleteCustomerUseCase",
    "CustomerStatsUseCase",
    "CreateCustomerCommand",
    "UpdateCustomerCommand",
    "ListCustomersQuery",
    "CustomerResponse",
    "CustomerStatsResponse",
    "DeleteCustomerResponse",
]
