import pytest
import pytest_asyncio
from httpx import AsyncClient


@pytest_asyncio.fixture
async def clerk(create_tenant, create_user):
    tenant_id = await create_tenant("Hardware Shop")
    return await create_user("clerk@hardware.com", tenant_id=tenant_id)


@pytest.mark.asyncio
async def test_product_cost_above_price_rejected(client: AsyncClient, clerk):
    """price=10, cost=12 fails; the same call with cost=10 succeeds"""
    rejected = await client.post(
        "/products", json={"name": "Hammer", "price": 10, "cost": 12}, headers=clerk.headers
    )

    assert rejected.status_code == 422
    assert rejected.json()["error"]["code"] == "VALIDATION_FAILED"
    listed = await client.get("/products", headers=clerk.headers)
    assert listed.json() == []

    accepted = await client.post(
        "/products", json={"name": "Hammer", "price": 10, "cost": 10}, headers=clerk.headers
    )

    assert accepted.status_code == 201
    product = accepted.json()
    assert float(product["price"]) == 10
    assert float(product["cost"]) == 10
    assert product["tenant_id"] == str(clerk.tenant_id)


@pytest.mark.asyncio
async def test_product_with_category_inline(client: AsyncClient, clerk):
    category = await client.post(
        "/categories", json={"name": "Tools", "description": "Hand tools"}, headers=clerk.headers
    )
    category_id = category.json()["id"]

    created = await client.post(
        "/products",
        json={"name": "Saw", "price": 25, "cost": 12, "stock_quantity": 3, "category_id": category_id},
        headers=clerk.headers,
    )
    assert created.status_code == 201
    assert created.json()["category"]["name"] == "Tools"

    listed = await client.get("/products", params={"category_id": category_id}, headers=clerk.headers)
    assert [p["name"] for p in listed.json()] == ["Saw"]
    assert listed.json()[0]["category"]["id"] == category_id


@pytest.mark.asyncio
async def test_product_rejects_foreign_category(
    client: AsyncClient, clerk, create_tenant, create_user
):
    other_tenant = await create_tenant("Other Shop")
    other = await create_user("clerk@other.com", tenant_id=other_tenant)
    foreign = await client.post("/categories", json={"name": "Secret"}, headers=other.headers)

    response = await client.post(
        "/products",
        json={"name": "Saw", "price": 5, "category_id": foreign.json()["id"]},
        headers=clerk.headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_low_stock_and_stock_update(client: AsyncClient, clerk):
    plenty = await client.post(
        "/products", json={"name": "Nails", "price": 1, "stock_quantity": 500}, headers=clerk.headers
    )
    await client.post(
        "/products", json={"name": "Drill", "price": 90, "stock_quantity": 2}, headers=clerk.headers
    )

    low = await client.get("/products/low-stock", headers=clerk.headers)
    assert [p["name"] for p in low.json()] == ["Drill"]

    nails_id = plenty.json()["id"]
    updated = await client.patch(
        f"/products/{nails_id}/stock", json={"stock_quantity": 0}, headers=clerk.headers
    )
    assert updated.status_code == 200
    assert updated.json()["stock_quantity"] == 0

    negative = await client.patch(
        f"/products/{nails_id}/stock", json={"stock_quantity": -1}, headers=clerk.headers
    )
    assert negative.status_code == 422

    stats = await client.get("/products/stats", headers=clerk.headers)
    assert stats.status_code == 200
    assert stats.json()["total_products"] == 2
    assert stats.json()["low_stock_products"] == 2
    assert stats.json()["out_of_stock_products"] == 1
    assert stats.json()["products_by_category"] == {"Uncategorized": 2}


@pytest.mark.asyncio
async def test_update_product_validates_merged_values(client: AsyncClient, clerk):
    created = await client.post(
        "/products", json={"name": "Saw", "price": 20, "cost": 15}, headers=clerk.headers
    )
    product_id = created.json()["id"]

    response = await client.patch(
        f"/products/{product_id}", json={"price": 10}, headers=clerk.headers
    )
    assert response.status_code == 422

    unchanged = await client.get(f"/products/{product_id}", headers=clerk.headers)
    assert float(unchanged.json()["price"]) == 20
    assert float(unchanged.json()["cost"]) == 15

    response = await client.patch(
        f"/products/{product_id}", json={"price": 30, "name": "Big Saw"}, headers=clerk.headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Big Saw"
    assert float(response.json()["price"]) == 30


@pytest.mark.asyncio
async def test_category_with_products_cannot_be_deleted(client: AsyncClient, clerk):
    category = await client.post("/categories", json={"name": "Tools"}, headers=clerk.headers)
    category_id = category.json()["id"]
    for name in ("Saw", "Drill"):
        await client.post(
            "/products",
            json={"name": name, "price": 10, "category_id": category_id},
            headers=clerk.headers,
        )

    response = await client.delete(f"/categories/{category_id}", headers=clerk.headers)

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "CATEGORY_NOT_EMPTY"
    assert error["message"] == "Cannot delete category. It contains 2 product(s)."
    assert error["details"] == {"product_count": 2}

    still_there = await client.get(f"/categories/{category_id}", headers=clerk.headers)
    assert still_there.status_code == 200


@pytest.mark.asyncio
async def test_empty_category_is_deleted(client: AsyncClient, clerk):
    category = await client.post("/categories", json={"name": "Garden"}, headers=clerk.headers)
    category_id = category.json()["id"]

    response = await client.delete(f"/categories/{category_id}", headers=clerk.headers)

    assert response.status_code == 200
    missing = await client.get(f"/categories/{category_id}", headers=clerk.headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_category_name(client: AsyncClient, clerk):
    await client.post("/categories", json={"name": "Tools"}, headers=clerk.headers)

    response = await client.post("/categories", json={"name": "Tools"}, headers=clerk.headers)

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_categories_for_select_sorted(client: AsyncClient, clerk):
    for name in ("Paint", "Electrical", "Lumber"):
        await client.post("/categories", json={"name": name}, headers=clerk.headers)

    response = await client.get("/categories/select", headers=clerk.headers)

    assert [c["name"] for c in response.json()] == ["Electrical", "Lumber", "Paint"]
