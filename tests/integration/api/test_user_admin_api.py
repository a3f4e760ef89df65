import pytest
from httpx import AsyncClient

from shoptrack.domain.entities import UserRole


@pytest.mark.asyncio
async def test_user_cannot_promote_self(client: AsyncClient, create_tenant, create_user):
    tenant_id = await create_tenant()
    user = await create_user("user@acme.com", tenant_id=tenant_id)

    response = await client.patch(
        f"/users/{user.id}", json={"role": "super_admin"}, headers=user.headers
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "SELF_PRIVILEGE_ESCALATION"

    context = await client.get("/auth/context", headers=user.headers)
    assert context.json()["role"] == "tenant_user"


@pytest.mark.asyncio
async def test_super_admin_cannot_demote_self(client: AsyncClient, create_user):
    root = await create_user("root@platform.com", role=UserRole.super_admin)

    response = await client.patch(
        f"/users/{root.id}", json={"role": "tenant_user"}, headers=root.headers
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "SELF_PRIVILEGE_ESCALATION"


@pytest.mark.asyncio
async def test_user_renames_self(client: AsyncClient, create_tenant, create_user):
    tenant_id = await create_tenant()
    user = await create_user("user@acme.com", tenant_id=tenant_id)

    response = await client.patch(
        f"/users/{user.id}",
        json={"full_name": "Ada Lovelace", "role": "tenant_user"},
        headers=user.headers,
    )

    assert response.status_code == 200
    assert response.json()["full_name"] == "Ada Lovelace"
    assert response.json()["tenant"]["name"] == "Acme"


@pytest.mark.asyncio
async def test_tenant_admin_cannot_touch_super_admin(
    client: AsyncClient, create_tenant, create_user
):
    tenant_id = await create_tenant()
    admin = await create_user("admin@acme.com", role=UserRole.tenant_admin, tenant_id=tenant_id)
    root = await create_user("root@platform.com", role=UserRole.super_admin, tenant_id=tenant_id)

    patch = await client.patch(
        f"/users/{root.id}", json={"full_name": "Hacked"}, headers=admin.headers
    )
    delete = await client.delete(f"/users/{root.id}", headers=admin.headers)

    assert patch.status_code == 403
    assert patch.json()["error"]["code"] == "INSUFFICIENT_ROLE"
    assert delete.status_code == 403

    unchanged = await client.get(f"/users/{root.id}", headers=root.headers)
    assert unchanged.json()["full_name"] == "root@platform.com"


@pytest.mark.asyncio
async def test_tenant_admin_creates_into_own_tenant(
    client: AsyncClient, create_tenant, create_user
):
    own = await create_tenant("Own")
    other = await create_tenant("Other")
    admin = await create_user("admin@own.com", role=UserRole.tenant_admin, tenant_id=own)

    response = await client.post(
        "/users",
        json={"email": "new@own.com", "password": "SecurePass123!", "tenant_id": str(other)},
        headers=admin.headers,
    )

    assert response.status_code == 201
    assert response.json()["tenant_id"] == str(own)
    assert response.json()["role"] == "tenant_user"

    elevated = await client.post(
        "/users",
        json={"email": "boss@own.com", "password": "SecurePass123!", "role": "tenant_admin"},
        headers=admin.headers,
    )
    assert elevated.status_code == 403


@pytest.mark.asyncio
async def test_tenant_admin_lists_own_tenant_only(
    client: AsyncClient, create_tenant, create_user
):
    own = await create_tenant("Own")
    other = await create_tenant("Other")
    admin = await create_user("admin@own.com", role=UserRole.tenant_admin, tenant_id=own)
    await create_user("member@own.com", tenant_id=own)
    await create_user("member@other.com", tenant_id=other)

    response = await client.get("/users", headers=admin.headers)

    emails = sorted(u["email"] for u in response.json())
    assert emails == ["admin@own.com", "member@own.com"]

    without_self = await client.get(
        "/users", params={"exclude_self": "true"}, headers=admin.headers
    )
    assert [u["email"] for u in without_self.json()] == ["member@own.com"]


@pytest.mark.asyncio
async def test_tenant_user_sees_only_self(client: AsyncClient, create_tenant, create_user):
    tenant_id = await create_tenant()
    user = await create_user("user@acme.com", tenant_id=tenant_id)
    colleague = await create_user("colleague@acme.com", tenant_id=tenant_id)

    listed = await client.get("/users", headers=user.headers)
    hidden = await client.get(f"/users/{colleague.id}", headers=user.headers)

    assert [u["email"] for u in listed.json()] == ["user@acme.com"]
    assert hidden.status_code == 404


@pytest.mark.asyncio
async def test_delete_user_removes_sign_in(client: AsyncClient, create_tenant, create_user):
    tenant_id = await create_tenant()
    admin = await create_user("admin@acme.com", role=UserRole.tenant_admin, tenant_id=tenant_id)
    member = await create_user("member@acme.com", tenant_id=tenant_id)

    response = await client.delete(f"/users/{member.id}", headers=admin.headers)

    assert response.status_code == 200
    gone = await client.get("/auth/context", headers=member.headers)
    assert gone.status_code == 401


@pytest.mark.asyncio
async def test_reset_password_super_admin_only(client: AsyncClient, create_tenant, create_user):
    tenant_id = await create_tenant()
    root = await create_user("root@platform.com", role=UserRole.super_admin)
    admin = await create_user("admin@acme.com", role=UserRole.tenant_admin, tenant_id=tenant_id)
    member = await create_user("member@acme.com", tenant_id=tenant_id)

    denied = await client.post(
        f"/users/{member.id}/reset-password",
        json={"new_password": "BrandNewPass1"},
        headers=admin.headers,
    )
    assert denied.status_code == 403

    allowed = await client.post(
        f"/users/{member.id}/reset-password",
        json={"new_password": "BrandNewPass1"},
        headers=root.headers,
    )
    assert allowed.status_code == 200

    signin = await client.post(
        "/auth/signin", json={"email": "member@acme.com", "password": "BrandNewPass1"}
    )
    assert signin.status_code == 200


@pytest.mark.asyncio
async def test_user_stats_for_super_admin(client: AsyncClient, create_tenant, create_user):
    tenant_id = await create_tenant()
    root = await create_user("root@platform.com", role=UserRole.super_admin)
    await create_user("admin@acme.com", role=UserRole.tenant_admin, tenant_id=tenant_id)
    await create_user("member@acme.com", tenant_id=tenant_id)

    response = await client.get("/users/stats", headers=root.headers)

    assert response.status_code == 200
    stats = response.json()
    assert stats["total_users"] == 3
    assert stats["super_admins"] == 1
    assert stats["tenant_admins"] == 1
    assert stats["tenant_users"] == 1
    assert stats["active_users"] == 3
