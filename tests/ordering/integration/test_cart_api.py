"""Integration tests for the cart and checkout endpoints."""

import pytest
from catalogue.product.product import Product
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import cart_router, order_router
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(cart_router)
    app.include_router(order_router)
    return TestClient(app)


@pytest.fixture()
def products(stock_product):
    return {
        "P": stock_product(),
        "Q": stock_product(sku="Q-1200", title="Product Q", price_cents=1200, stock=5),
    }


@pytest.fixture()
def checkout_body():
    return {
        "customer_name": "Jane Wanjiku",
        "phone": "0722 690 154",
        "address": "Moi Avenue, Nairobi",
        "email": "jane@example.com",
    }


def _new_cart(client):
    response = client.post("/carts", json={"session_id": "sess-001"})
    assert response.status_code == 201
    return response.json()["cart_id"]


def _fill(client, products):
    cart_id = _new_cart(client)
    client.post(f"/carts/{cart_id}/items", json={"product_id": products["P"], "quantity": 2})
    client.post(f"/carts/{cart_id}/items", json={"product_id": products["Q"]})
    return cart_id


class TestCartEndpoints:
    def test_new_cart_is_empty(self, client):
        data = client.get(f"/carts/{_new_cart(client)}").json()
        assert data["lines"] == []
        assert data["subtotal"] == 0
        assert data["is_open"] is False

    def test_add_items(self, client, products):
        data = client.get(f"/carts/{_fill(client, products)}").json()
        assert data["subtotal"] == 2200
        assert data["item_count"] == 3
        assert data["is_open"] is True
        assert [line["title"] for line in data["lines"]] == ["Product Q", "Product P"]
        assert data["lines"][1]["line_total"] == 1000

    def test_add_unknown_product(self, client):
        cart_id = _new_cart(client)
        response = client.post(f"/carts/{cart_id}/items", json={"product_id": "missing"})
        assert response.status_code == 404

    def test_add_inactive_product(self, client, stock_product):
        hidden = stock_product(is_active=False)
        cart_id = _new_cart(client)
        response = client.post(f"/carts/{cart_id}/items", json={"product_id": hidden})
        assert response.status_code == 400

    def test_update_quantity(self, client, products):
        cart_id = _fill(client, products)
        data = client.put(f"/carts/{cart_id}/items/{products['P']}", json={"quantity": 0}).json()
        assert data["item_count"] == 2
        assert data["subtotal"] == 1700

    def test_remove_item(self, client, products):
        cart_id = _fill(client, products)
        data = client.delete(f"/carts/{cart_id}/items/{products['Q']}").json()
        assert [line["title"] for line in data["lines"]] == ["Product P"]

    def test_clear(self, client, products):
        cart_id = _fill(client, products)
        data = client.delete(f"/carts/{cart_id}/items").json()
        assert data["lines"] == []
        assert data["subtotal"] == 0

    def test_visibility(self, client, products):
        cart_id = _fill(client, products)
        data = client.put(f"/carts/{cart_id}/visibility", json={"is_open": False}).json()
        assert data["is_open"] is False

    def test_unknown_cart(self, client):
        assert client.get("/carts/missing").status_code == 404


class TestCheckoutEndpoint:
    def test_places_order_and_deducts_stock(self, client, products, checkout_body, catalogue_domain):
        cart_id = _fill(client, products)

        response = client.post(f"/carts/{cart_id}/checkout", json=checkout_body)
        assert response.status_code == 201
        order_id = response.json()["order_id"]

        order = client.get(f"/orders/{order_id}").json()
        assert order["total"] == 2200
        assert order["item_count"] == 3
        assert order["phone"] == "254722690154"
        assert order["status"] == "Pending"
        assert order["payment_status"] == "Pending"

        assert client.get(f"/carts/{cart_id}").json()["lines"] == []

        with catalogue_domain.domain_context():
            repo = current_domain.repository_for(Product)
            assert repo.get(products["P"]).stock == 8
            assert repo.get(products["Q"]).stock == 4

    def test_out_of_stock_line_blocks_checkout(self, client, products, checkout_body, catalogue_domain):
        cart_id = _new_cart(client)
        client.post(f"/carts/{cart_id}/items", json={"product_id": products["Q"], "quantity": 6})

        response = client.post(f"/carts/{cart_id}/checkout", json=checkout_body)
        assert response.status_code == 400

        assert client.get(f"/carts/{cart_id}").json()["item_count"] == 6
        assert client.get("/orders").json()["orders"] == []
        with catalogue_domain.domain_context():
            assert current_domain.repository_for(Product).get(products["Q"]).stock == 5

    def test_invalid_form(self, client, products):
        cart_id = _fill(client, products)
        response = client.post(f"/carts/{cart_id}/checkout", json={"customer_name": "Jane"})
        assert response.status_code == 400
        assert client.get(f"/carts/{cart_id}").json()["item_count"] == 3

    def test_empty_cart(self, client, checkout_body):
        response = client.post(f"/carts/{_new_cart(client)}/checkout", json=checkout_body)
        assert response.status_code == 400
