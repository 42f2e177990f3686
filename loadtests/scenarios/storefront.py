"""Storefront load test scenarios.

Shoppers browse the catalogue, fill a cart and check out, then look their
order up on the tracking page. Some leave without buying.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import browse_params, cart_data, checkout_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class ShopperJourney(SequentialTaskSet):
    """Browse -> Create Cart -> Add 1-3 products -> Adjust -> Checkout -> Track."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def browse(self):
        with self.client.get(
            "/products/browse",
            params=browse_params(),
            catch_response=True,
            name="GET /products/browse",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
                return

        # In-stock listing gives the shopper something to buy
        with self.client.get(
            "/products/browse",
            params={"in_stock": "true"},
            catch_response=True,
            name="GET /products/browse",
        ) as resp:
            products = resp.json().get("products", []) if resp.status_code == 200 else []
            if not products:
                resp.failure("Nothing in stock to buy")
                self.interrupt()
                return
            self.state.seen_product_ids = [p["product_id"] for p in products]

    @task
    def view_product(self):
        product_id = random.choice(self.state.seen_product_ids)
        self.client.get(f"/products/{product_id}", name="GET /products/{id}")

    @task
    def create_cart(self):
        with self.client.post("/carts", json=cart_data(), catch_response=True, name="POST /carts") as resp:
            if resp.status_code == 201:
                self.state.cart_id = resp.json()["cart_id"]
            else:
                resp.failure(f"Create cart failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_items(self):
        picks = random.sample(self.state.seen_product_ids, k=min(len(self.state.seen_product_ids), random.randint(1, 3)))
        for product_id in picks:
            with self.client.post(
                f"/carts/{self.state.cart_id}/items",
                json={"product_id": product_id, "quantity": 1},
                catch_response=True,
                name="POST /carts/{id}/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.line_count = len(resp.json()["lines"])
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def adjust_quantity(self):
        with self.client.get(f"/carts/{self.state.cart_id}", name="GET /carts/{id}") as resp:
            lines = resp.json().get("lines", []) if resp.status_code == 200 else []
        if lines:
            self.client.put(
                f"/carts/{self.state.cart_id}/items/{lines[0]['product_id']}",
                json={"quantity": 2},
                name="PUT /carts/{id}/items/{product_id}",
            )

    @task
    def checkout(self):
        if self.state.line_count == 0:
            self.interrupt()
            return

        with self.client.post(
            f"/carts/{self.state.cart_id}/checkout",
            json=checkout_data(),
            catch_response=True,
            name="POST /carts/{id}/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            elif resp.status_code == 400:
                # Stock ran out under other shoppers; expected under load
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def track_order(self):
        with self.client.get(
            f"/orders/{self.state.order_id}/tracking",
            catch_response=True,
            name="GET /orders/{id}/tracking",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Tracking failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class WindowShopperJourney(SequentialTaskSet):
    """Browse -> Add to cart -> Clear cart. Never checks out."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def browse(self):
        with self.client.get(
            "/products/browse",
            params=browse_params(),
            catch_response=True,
            name="GET /products/browse",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
                return
            self.state.seen_product_ids = [p["product_id"] for p in resp.json()["products"]]
            if not self.state.seen_product_ids:
                self.interrupt()

    @task
    def fill_and_clear(self):
        with self.client.post("/carts", json=cart_data(), name="POST /carts") as resp:
            if resp.status_code != 201:
                self.interrupt()
                return
            self.state.cart_id = resp.json()["cart_id"]

        self.client.post(
            f"/carts/{self.state.cart_id}/items",
            json={"product_id": random.choice(self.state.seen_product_ids)},
            name="POST /carts/{id}/items",
        )
        self.client.put(
            f"/carts/{self.state.cart_id}/visibility",
            json={"is_open": False},
            name="PUT /carts/{id}/visibility",
        )
        self.client.delete(f"/carts/{self.state.cart_id}/items", name="DELETE /carts/{id}/items")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Storefront traffic: most visitors only look, some buy."""

    tasks = {WindowShopperJourney: 3, ShopperJourney: 2}
    wait_time = between(0.5, 2.0)
