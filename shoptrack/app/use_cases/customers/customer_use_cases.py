"""
Customer Use Cases

CRUD and statistics for the customers of the caller's tenant.
"""

from datetime import timedelta
from typing import List

from shoptrack.app.services.guards import (
    blank_to_none,
    not_found_error,
    page_window,
    require_tenant,
    translate_store_errors,
)
from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.base import utcnow
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Customer
from shoptrack.domain.policy import Resource, changed_values, check_update
from shoptrack.libs.result import Error, Result, Return

from .dtos import (
    CreateCustomerCommand,
    CustomerResponse,
    CustomerStatsResponse,
    DeleteCustomerResponse,
    ListCustomersQuery,
    UpdateCustomerCommand,
)

OPTIONAL_TEXT_FIELDS = ("email", "phone", "address")


class ListCustomersUseCase:
    """
    Use case for listing customers.

    Business Rules:
    - Only customers of the caller's tenant
    - Search matches name, email or phone, case-insensitive
    - Newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, query: ListCustomersQuery
    ) -> Result[List[CustomerResponse]]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)
        limit, offset = page_window(query.limit, query.offset)

        async with self.uow:
            customers = await self.uow.customers.list_visible(
                caller, caller.tenant_id, search=query.search, limit=limit, offset=offset
            )
            return Return.ok([CustomerResponse.model_validate(c) for c in customers])


class GetCustomerUseCase:
    """Use case for reading one customer of the caller's tenant"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, customer_id: int) -> Result[CustomerResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        async with self.uow:
            customer = await self.uow.customers.get_visible(caller, caller.tenant_id, customer_id)
            if customer is None:
                return Return.err(not_found_error("Customer"))
            return Return.ok(CustomerResponse.model_validate(customer))


class CreateCustomerUseCase:
    """
    Use case for creating a customer.

    Business Rules:
    - Always created in the caller's tenant
    - Blank email, phone and address are stored as NULL
    - Email, when given, is unique across all tenants
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, command: CreateCustomerCommand
    ) -> Result[CustomerResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)
        if not command.name.strip():
            return Return.err(Error("VALIDATION_FAILED", "Customer name is required"))

        async with self.uow:
            customer = Customer(
                tenant_id=caller.tenant_id,
                name=command.name.strip(),
                email=blank_to_none(command.email),
                phone=blank_to_none(command.phone),
                address=blank_to_none(command.address),
            )
            customer = await self.uow.customers.create(caller, customer)
            await self.uow.commit()
            return Return.ok(CustomerResponse.model_validate(customer))


class UpdateCustomerUseCase:
    """
    Use case for updating a customer.

    Business Rules:
    - Only customers of the caller's tenant; the tenant never changes
    - Blank optional fields are stored as NULL
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(
        self, caller: CallerContext, customer_id: int, command: UpdateCustomerCommand
    ) -> Result[CustomerResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        requested = command.model_dump(exclude_unset=True)
        if "name" in requested:
            if requested["name"] is None or not requested["name"].strip():
                return Return.err(Error("VALIDATION_FAILED", "Customer name is required"))
            requested["name"] = requested["name"].strip()
        for key in OPTIONAL_TEXT_FIELDS:
            if key in requested:
                requested[key] = blank_to_none(requested[key])

        async with self.uow:
            customer = await self.uow.customers.get_visible(caller, caller.tenant_id, customer_id)
            if customer is None:
                return Return.err(not_found_error("Customer"))

            changes = changed_values(customer, requested)
            denial = check_update(caller, Resource.customers, customer, changes)
            if denial is not None:
                return Return.err(denial)

            customer = await self.uow.customers.update(caller, customer, changes)
            await self.uow.commit()
            return Return.ok(CustomerResponse.model_validate(customer))


class DeleteCustomerUseCase:
    """Use case for deleting a customer of the caller's tenant"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext, customer_id: int) -> Result[DeleteCustomerResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        async with self.uow:
            customer = await self.uow.customers.get_visible(caller, caller.tenant_id, customer_id)
            if customer is None:
                return Return.err(not_found_error("Customer"))

            await self.uow.customers.delete(caller, customer)
            await self.uow.commit()
            return Return.ok(DeleteCustomerResponse(status="deleted", message="Customer deleted"))


class CustomerStatsUseCase:
    """
    Customer counts of the caller's tenant.

    The month starts on day 1 at midnight UTC, the week on Sunday.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @translate_store_errors
    async def execute(self, caller: CallerContext) -> Result[CustomerStatsResponse]:
        error = require_tenant(caller)
        if error is not None:
            return Return.err(error)

        today = utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
        start_of_month = today.replace(day=1)
        start_of_week = today - timedelta(days=(today.weekday() + 1) % 7)

        async with self.uow:
            count = self.uow.customers.count_visible
            return Return.ok(
                CustomerStatsResponse(
                    total_customers=await count(caller, caller.tenant_id),
                    new_customers_this_month=await count(
                        caller, caller.tenant_id, created_since=start_of_month
                    ),
                    new_customers_this_week=await count(
                        caller, caller.tenant_id, created_since=start_of_week
                    ),
                )
            )
