"""
Unit tests for the access policy decision functions.
"""

from uuid import uuid4

import pytest

from shoptrack.domain.entities import Customer, UserProfile, UserRole, UserStatus
from shoptrack.domain.policy import (
    Action,
    Resource,
    RowRef,
    changed_values,
    check_update,
    is_visible,
    read_scope,
    row_ref,
    write_denial,
)


def test_super_admin_reads_everything(super_admin):
    scope = read_scope(super_admin, Resource.customers)

    assert scope.unrestricted is True
    assert is_visible(super_admin, Resource.customers, RowRef(tenant_id=uuid4(), row_id=1))


def test_tenant_user_reads_only_own_tenant_rows(tenant_user, tenant_id):
    own = RowRef(tenant_id=tenant_id, row_id=1)
    foreign = RowRef(tenant_id=uuid4(), row_id=2)

    for resource in (Resource.customers, Resource.products, Resource.categories):
        assert is_visible(tenant_user, resource, own)
        assert not is_visible(tenant_user, resource, foreign)


def test_tenant_user_sees_only_own_profile(tenant_user, tenant_id):
    own = RowRef(tenant_id=tenant_id, row_id=tenant_user.user_id, role=UserRole.tenant_user)
    colleague = RowRef(tenant_id=tenant_id, row_id=uuid4(), role=UserRole.tenant_user)

    assert is_visible(tenant_user, Resource.user_profiles, own)
    assert not is_visible(tenant_user, Resource.user_profiles, colleague)


def test_tenant_admin_sees_own_tenant_profiles_and_own_row(make_caller):
    admin = make_caller(UserRole.tenant_admin, tenant_id=None)
    own = RowRef(tenant_id=None, row_id=admin.user_id, role=UserRole.tenant_admin)

    assert is_visible(admin, Resource.user_profiles, own)
    assert not is_visible(admin, Resource.user_profiles, RowRef(tenant_id=None, row_id=uuid4()))


def test_unassigned_caller_sees_no_tenant_rows(make_caller):
    caller = make_caller(UserRole.tenant_user, tenant_id=None)

    scope = read_scope(caller, Resource.customers)

    assert scope.is_empty
    assert not is_visible(caller, Resource.customers, RowRef(tenant_id=None, row_id=1))


def test_tenant_user_cannot_write_other_tenant_rows(tenant_user):
    error = write_denial(
        tenant_user, Resource.customers, RowRef(tenant_id=uuid4()), Action.create
    )

    assert error is not None
    assert error.code == "INSUFFICIENT_ROLE"


def test_non_super_admins_cannot_write_tenants(tenant_admin, tenant_id):
    error = write_denial(
        tenant_admin, Resource.tenants, RowRef(tenant_id=tenant_id), Action.update
    )

    assert error.code == "INSUFFICIENT_ROLE"


def test_tenant_admin_manages_only_tenant_users(tenant_admin, tenant_id):
    user_row = RowRef(tenant_id=tenant_id, row_id=uuid4(), role=UserRole.tenant_user)
    admin_row = RowRef(tenant_id=tenant_id, row_id=uuid4(), role=UserRole.tenant_admin)
    super_row = RowRef(tenant_id=None, row_id=uuid4(), role=UserRole.super_admin)

    assert write_denial(tenant_admin, Resource.user_profiles, user_row, Action.delete) is None
    assert write_denial(tenant_admin, Resource.user_profiles, admin_row, Action.delete) is not None
    assert write_denial(tenant_admin, Resource.user_profiles, super_row, Action.update) is not None


def test_tenant_admin_cannot_promote_user(tenant_admin, tenant_id):
    profile = UserProfile(
        id=uuid4(), email="u@example.com", role=UserRole.tenant_user, tenant_id=tenant_id
    )

    error = check_update(
        tenant_admin, Resource.user_profiles, profile, {"role": UserRole.super_admin}
    )

    assert error.code == "INSUFFICIENT_ROLE"


def test_tenant_admin_cannot_move_user_to_other_tenant(tenant_admin, tenant_id):
    profile = UserProfile(
        id=uuid4(), email="u@example.com", role=UserRole.tenant_user, tenant_id=tenant_id
    )

    error = check_update(tenant_admin, Resource.user_profiles, profile, {"tenant_id": uuid4()})

    assert error.code == "INSUFFICIENT_ROLE"


def test_nobody_changes_own_role(super_admin):
    profile = UserProfile(
        id=super_admin.user_id, email="root@example.com", role=UserRole.super_admin
    )

    error = check_update(
        super_admin, Resource.user_profiles, profile, {"role": UserRole.tenant_user}
    )

    assert error.code == "SELF_PRIVILEGE_ESCALATION"


def test_own_status_is_locked(tenant_user, tenant_id):
    profile = UserProfile(
        id=tenant_user.user_id,
        email="u@example.com",
        role=UserRole.tenant_user,
        tenant_id=tenant_id,
        status=UserStatus.active,
    )

    error = check_update(
        tenant_user, Resource.user_profiles, profile, {"status": UserStatus.suspended}
    )

    assert error.code == "SELF_PRIVILEGE_ESCALATION"


def test_tenant_user_may_rename_self_only(tenant_user, tenant_id):
    profile = UserProfile(
        id=tenant_user.user_id, email="u@example.com", role=UserRole.tenant_user, tenant_id=tenant_id
    )

    assert check_update(tenant_user, Resource.user_profiles, profile, {"full_name": "Ada"}) is None

    error = check_update(
        tenant_user, Resource.user_profiles, profile, {"permissions": {"x": True}}
    )
    assert error.code == "INSUFFICIENT_ROLE"


def test_resubmitting_current_values_is_not_a_change(tenant_user, tenant_id):
    profile = UserProfile(
        id=tenant_user.user_id, email="u@example.com", role=UserRole.tenant_user, tenant_id=tenant_id
    )

    changes = changed_values(profile, {"role": UserRole.tenant_user, "full_name": "Ada"})

    assert changes == {"full_name": "Ada"}
    assert check_update(tenant_user, Resource.user_profiles, profile, changes) is None


def test_customer_cannot_move_between_tenants(tenant_user, tenant_id):
    customer = Customer(id=1, tenant_id=tenant_id, name="Ada")

    error = check_update(tenant_user, Resource.customers, customer, {"tenant_id": uuid4()})

    assert error.code == "INSUFFICIENT_ROLE"


def test_row_ref_projects_tenant_scoped_rows(tenant_id):
    customer = Customer(id=7, tenant_id=tenant_id, name="Ada")

    assert row_ref(Resource.products, customer) == RowRef(tenant_id=tenant_id, row_id=7)


def test_row_ref_rejects_unknown_resource(tenant_id):
    customer = Customer(id=7, tenant_id=tenant_id, name="Ada")

    with pytest.raises(ValueError):
        row_ref("orders", customer)
