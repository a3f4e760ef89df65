"""
Access Policy

Single source of row-level access decisions. The same functions are used by
the repositories, which enforce them on every statement, and by the use
cases, which check them up front to return precise errors.

Decision table (caller role x resource):

    resource         super_admin  tenant_admin                      tenant_user
    tenants          read/write   read own tenant                   read own tenant
    user_profiles    read/write   read own tenant + own row,        read/write own row
                                  write tenant_user rows of own
                                  tenant, update own row
    customers,       read/write   read/write own tenant             read/write own tenant
    products,
    categories

Field rules on the caller's own profile row:
    - role and status never change (SELF_PRIVILEGE_ESCALATION)
    - outside super_admin, only full_name changes (INSUFFICIENT_ROLE otherwise)
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from shoptrack.domain.caller import CallerContext
from shoptrack.domain.entities.enums import UserRole
from shoptrack.libs.result import Error


class Resource(str, Enum):
    """Tables guarded by the policy"""

    tenants = "tenants"
    user_profiles = "user_profiles"
    customers = "customers"
    products = "products"
    categories = "categories"


class Action(str, Enum):
    """Kinds of write"""

    create = "create"
    update = "update"
    delete = "delete"


TENANT_SCOPED_RESOURCES = frozenset(
    {Resource.customers, Resource.products, Resource.categories}
)

SELF_LOCKED_FIELDS = frozenset({"role", "status"})
SELF_EDITABLE_FIELDS = frozenset({"full_name"})


@dataclass(frozen=True)
class RowRef:
    """Policy-relevant projection of a row.

    For tenants, tenant_id is the tenant's own id.
    """

    tenant_id: Optional[UUID]
    row_id: Any = None
    role: Optional[UserRole] = None


@dataclass(frozen=True)
class ReadScope:
    """Rows a caller may read: all, or the OR of the non-null terms.

    A scope with no terms matches nothing.
    """

    unrestricted: bool = False
    tenant_id: Optional[UUID] = None
    own_row_id: Optional[UUID] = None

    @property
    def is_empty(self) -> bool:
        return not self.unrestricted and self.tenant_id is None and self.own_row_id is None

    def matches(self, row: RowRef) -> bool:
        if self.unrestricted:
            return True
        if self.tenant_id is not None and row.tenant_id == self.tenant_id:
            return True
        if self.own_row_id is not None and row.row_id == self.own_row_id:
            return True
        return False


class PolicyViolation(Exception):
    """Raised by the store boundary when a statement breaks the policy"""

    def __init__(self, error: Error):
        self.error = error
        super().__init__(error.message)


def row_ref(resource: Resource, row: Any) -> RowRef:
    """Project an entity onto the fields the policy looks at"""
    if resource == Resource.tenants:
        return RowRef(tenant_id=row.id, row_id=row.id)
    if resource == Resource.user_profiles:
        return RowRef(tenant_id=row.tenant_id, row_id=row.id, role=row.role)
    if resource in TENANT_SCOPED_RESOURCES:
        return RowRef(tenant_id=row.tenant_id, row_id=row.id)
    raise ValueError(f"Unhandled resource: {resource!r}")


def read_scope(caller: CallerContext, resource: Resource) -> ReadScope:
    """Rows of ``resource`` visible to ``caller``"""
    role = caller.role
    if role == UserRole.super_admin:
        return ReadScope(unrestricted=True)
    if role == UserRole.tenant_admin:
        if resource == Resource.user_profiles:
            return ReadScope(tenant_id=caller.tenant_id, own_row_id=caller.user_id)
        return ReadScope(tenant_id=caller.tenant_id)
    if role == UserRole.tenant_user:
        if resource == Resource.user_profiles:
            return ReadScope(own_row_id=caller.user_id)
        return ReadScope(tenant_id=caller.tenant_id)
    raise ValueError(f"Unhandled role: {role!r}")


def is_visible(caller: CallerContext, resource: Resource, row: RowRef) -> bool:
    return read_scope(caller, resource).matches(row)


def _insufficient(message: str) -> Error:
    return Error("INSUFFICIENT_ROLE", message)


def _same_tenant(caller: CallerContext, row: RowRef) -> bool:
    return caller.tenant_id is not None and row.tenant_id == caller.tenant_id


def write_denial(
    caller: CallerContext, resource: Resource, row: RowRef, action: Action
) -> Optional[Error]:
    """
    Check whether ``caller`` may write ``row``.

    For updates this is evaluated on both the row as stored and the row as
    it would be stored; see ``update_denial``.

    Returns:
        None when allowed, otherwise the Error to report
    """
    role = caller.role
    if role == UserRole.super_admin:
        return None

    if role == UserRole.tenant_admin:
        if resource == Resource.tenants:
            return _insufficient("Only super admins can modify tenants")
        if resource == Resource.user_profiles:
            if action == Action.update and row.row_id == caller.user_id:
                return None
            if not _same_tenant(caller, row):
                return _insufficient("Tenant admins can only manage users of their own tenant")
            if row.role != UserRole.tenant_user:
                return _insufficient("Tenant admins can only manage tenant users")
            return None
        if not _same_tenant(caller, row):
            return _insufficient("Row belongs to another tenant")
        return None

    if role == UserRole.tenant_user:
        if resource == Resource.tenants:
            return _insufficient("Only super admins can modify tenants")
        if resource == Resource.user_profiles:
            if action == Action.update and row.row_id == caller.user_id:
                return None
            return _insufficient("Tenant users can only update their own profile")
        if not _same_tenant(caller, row):
            return _insufficient("Row belongs to another tenant")
        return None

    raise ValueError(f"Unhandled role: {role!r}")


def update_denial(
    caller: CallerContext,
    resource: Resource,
    before: RowRef,
    after: RowRef,
    changed_fields: Iterable[str],
) -> Optional[Error]:
    """
    Check an update of ``before`` into ``after``.

    ``changed_fields`` lists only fields whose value actually changes;
    re-submitting a field with its current value is not a change.
    """
    changed = set(changed_fields)

    if resource == Resource.user_profiles and before.row_id == caller.user_id:
        escalated = changed & SELF_LOCKED_FIELDS
        if escalated:
            return Error(
                "SELF_PRIVILEGE_ESCALATION",
                f"You cannot change your own {' or '.join(sorted(escalated))}",
            )
        if caller.role != UserRole.super_admin:
            restricted = changed - SELF_EDITABLE_FIELDS
            if restricted:
                return _insufficient(
                    f"You cannot change your own {', '.join(sorted(restricted))}"
                )
            return None

    return write_denial(caller, resource, before, Action.update) or write_denial(
        caller, resource, after, Action.update
    )


def changed_values(row: Any, changes: Dict[str, Any]) -> Dict[str, Any]:
    """Drop entries that would store the value already present"""
    return {key: value for key, value in changes.items() if getattr(row, key) != value}


def check_write(caller: CallerContext, resource: Resource, row: Any, action: Action) -> Optional[Error]:
    """``write_denial`` for an entity instead of a RowRef"""
    return write_denial(caller, resource, row_ref(resource, row), action)


def check_update(
    caller: CallerContext, resource: Resource, row: Any, changes: Dict[str, Any]
) -> Optional[Error]:
    """
    ``update_denial`` for an entity and the changes about to be applied.

    ``changes`` should already be reduced with ``changed_values``.
    """
    before = row_ref(resource, row)
    after = before
    if "tenant_id" in changes and resource != Resource.tenants:
        after = replace(after, tenant_id=changes["tenant_id"])
    if "role" in changes:
        after = replace(after, role=changes["role"])
    return update_denial(caller, resource, before, after, changes.keys())
