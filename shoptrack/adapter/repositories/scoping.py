"""
Row Store boundary helpers

Compile the access policy into SQL predicates and check writes before they
reach the database. Every repository statement goes through these.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import false, or_, true

from shoptrack.domain.caller import CallerContext
from shoptrack.domain.policy import (
    Action,
    PolicyViolation,
    ReadScope,
    Resource,
    check_update,
    check_write,
)

logger = logging.getLogger(__name__)


def scope_clause(scope: ReadScope, tenant_column, id_column=None):
    """SQL predicate equivalent to ``scope.matches``"""
    if scope.unrestricted:
        return true()
    terms = []
    if scope.tenant_id is not None:
        terms.append(tenant_column == scope.tenant_id)
    if scope.own_row_id is not None and id_column is not None:
        terms.append(id_column == scope.own_row_id)
    if not terms:
        return false()
    return or_(*terms)


def search_clause(term: Optional[str], *columns):
    """Case-insensitive partial match on any of ``columns``, or None for no filter"""
    if term is None or not term.strip():
        return None
    literal = term.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{literal}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in columns))


def enforce_write(caller: CallerContext, resource: Resource, row: Any, action: Action) -> None:
    error = check_write(caller, resource, row, action)
    if error is not None:
        logger.info(f"Refused {action.value} on {resource.value} for {caller.user_id}: {error.code}")
        raise PolicyViolation(error)


def enforce_update(
    caller: CallerContext, resource: Resource, row: Any, changes: Dict[str, Any]
) -> None:
    """Check the row as stored and the row as it would be stored"""
    error = check_update(caller, resource, row, changes)
    if error is not None:
        logger.info(f"Refused update on {resource.value} for {caller.user_id}: {error.code}")
        raise PolicyViolation(error)
