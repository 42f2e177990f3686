"""Integration tests for the Catalogue FastAPI endpoints."""

import pytest
from catalogue.api import product_router
from catalogue.product.product import Product
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from protean.utils.globals import current_domain


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(product_router)
    return TestClient(app)


def _create(client, **overrides):
    payload = {
        "sku": "SWC-3D",
        "title": "3D Steering Wheel Covers (Assorted)",
        "brand": "Talex",
        "category": "car",
        "price_cents": 80000,
        "stock": 12,
        "images": ["https://picsum.photos/seed/talex-swc/600/400"],
    }
    payload.update(overrides)
    response = client.post("/products", json=payload)
    assert response.status_code == 201
    return response.json()["product_id"]


class TestProductContract:
    def test_create_product(self, client):
        product_id = _create(client)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.slug == "3d-steering-wheel-covers-assorted"

    def test_create_returns_the_product(self, client):
        response = client.post(
            "/products",
            json={"sku": "TI-1", "title": "Tyre Inflator", "category": "tools", "price_cents": 350000, "stock": 4},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "tyre-inflator"
        assert data["category_label"] == "power tools"
        assert (data["price_cents"], data["stock"], data["is_active"]) == (350000, 4, True)

    def test_create_rejects_unknown_category(self, client):
        response = client.post(
            "/products",
            json={"sku": "X", "title": "Thing", "category": "garden", "price_cents": 100},
        )
        assert response.status_code == 422

    def test_list_includes_inactive(self, client):
        _create(client, sku="A")
        _create(client, sku="B", is_active=False)
        response = client.get("/products")
        assert response.status_code == 200
        assert len(response.json()["products"]) == 2

    def test_get_product(self, client):
        product_id = _create(client)
        data = client.get(f"/products/{product_id}").json()
        assert data["category_label"] == "car accessories"
        assert data["images"] == [{"url": "https://picsum.photos/seed/talex-swc/600/400", "kind": "image"}]

    def test_get_unknown_product_is_404(self, client):
        assert client.get("/products/does-not-exist").status_code == 404

    def test_update_product(self, client):
        product_id = _create(client)
        response = client.put(f"/products/{product_id}", json={"price_cents": 75000})
        assert response.status_code == 200
        assert response.json()["product_id"] == product_id
        assert response.json()["price_cents"] == 75000
        assert response.json()["title"] == "3D Steering Wheel Covers (Assorted)"
        assert current_domain.repository_for(Product).get(product_id).price_cents == 75000

    def test_update_unknown_product_is_404(self, client):
        assert client.put("/products/missing", json={"stock": 1}).status_code == 404

    def test_delete_product(self, client):
        product_id = _create(client)
        assert client.delete(f"/products/{product_id}").status_code == 200
        assert client.get(f"/products/{product_id}").status_code == 404


class TestStorefrontEndpoints:
    def test_browse_hides_inactive_and_reports_bounds(self, client):
        _create(client, sku="A", title="Wiper Blades", price_cents=45000)
        _create(client, sku="B", title="Floor Mats", price_cents=30000, is_active=False)
        data = client.get("/products/browse").json()
        assert [p["title"] for p in data["products"]] == ["Wiper Blades"]
        assert data["min_price"] == 45000
        assert data["max_price"] == 45000

    def test_browse_filters_and_sorts(self, client):
        _create(client, sku="A", title="Cordless Drill", category="tools", price_cents=249900, stock=0)
        _create(client, sku="B", title="Angle Grinder", category="tools", price_cents=99000)
        _create(client, sku="C", title="Wiper Blades", price_cents=45000)
        data = client.get("/products/browse", params={"category": "tools", "sort": "price-asc"}).json()
        assert [p["title"] for p in data["products"]] == ["Angle Grinder", "Cordless Drill"]

        in_stock = client.get("/products/browse", params={"category": "tools", "in_stock": "true"}).json()
        assert [p["title"] for p in in_stock["products"]] == ["Angle Grinder"]

    def test_browse_rejects_unknown_sort(self, client):
        assert client.get("/products/browse", params={"sort": "random"}).status_code == 400


class TestBackOfficeEndpoints:
    def test_manage_pages(self, client):
        for index in range(12):
            _create(client, sku=f"SKU{index}", title=f"Premium Car Accessory {index + 1}")
        data = client.get("/products/manage", params={"page": 2}).json()
        assert data["total"] == 12
        assert data["page_count"] == 2
        assert len(data["products"]) == 2

    def test_inventory(self, client):
        _create(client, sku="A", stock=0)
        _create(client, sku="B", stock=30)
        data = client.get("/products/inventory").json()
        assert data["product_count"] == 2
        assert data["out_of_stock_count"] == 1
        assert len(data["low_stock"]) == 1
