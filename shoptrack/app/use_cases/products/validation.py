from decimal import Decimal
from typing import Optional
from uuid import UUID

from shoptrack.app.services.unit_of_work import UnitOfWork
from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities import Category
from shoptrack.libs.result import Error, Result, Return


def _invalid(message: str) -> Error:
    return Error("VALIDATION_FAILED", message)


def check_pricing(price: Decimal, cost: Decimal, stock_quantity: int) -> Optional[Error]:
    """price > 0, 0 <= cost <= price, stock_quantity >= 0"""
    if price is None or price <= 0:
        return _invalid("Price must be greater than 0")
    if cost is None or cost < 0:
        return _invalid("Cost cannot be negative")
    if cost > price:
        return _invalid("Cost cannot be greater than price")
    if stock_quantity is None or stock_quantity < 0:
        return _invalid("Stock quantity cannot be negative")
    return None


async def resolve_category(
    uow: UnitOfWork, caller: CallerContext, tenant_id: UUID, category_id: Optional[int]
) -> Result[Optional[Category]]:
    """The referenced category, which must belong to the caller's tenant"""
    if category_id is None:
        return Return.ok(None)
    category = await uow.categories.get_visible(caller, tenant_id, category_id)
    if category is None:
        return Return.err(_invalid("Category does not exist in this tenant"))
    return Return.ok(category)
