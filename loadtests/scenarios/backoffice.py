"""Back-office load test scenarios.

Administrators stock the catalogue, take orders by phone, move orders
through fulfillment and record M-Pesa payments.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import mpesa_receipt, order_data, product_data, product_patch
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import OrderState, ProductState


class ProductManagementJourney(SequentialTaskSet):
    """Create Product -> Patch price and stock -> Review lists -> Hide or keep."""

    def on_start(self):
        self.state = ProductState()

    @task
    def create_product(self):
        payload = product_data()
        with self.client.post("/products", json=payload, catch_response=True, name="POST /products") as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["product_id"]
                self.state.price_cents = payload["price_cents"]
            else:
                resp.failure(f"Create product failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def patch_product(self):
        with self.client.put(
            f"/products/{self.state.product_id}",
            json=product_patch(),
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update product failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def review_lists(self):
        self.client.get(
            "/products/manage",
            params={"status": random.choice(["all", "active", "inactive", "out"]), "page": 1},
            name="GET /products/manage",
        )
        self.client.get("/products/inventory", name="GET /products/inventory")

    @task
    def maybe_hide(self):
        if random.random() < 0.2:
            self.client.put(
                f"/products/{self.state.product_id}",
                json={"is_active": False},
                name="PUT /products/{id}",
            )
            self.state.is_active = False

    @task
    def done(self):
        self.interrupt()


class OrderAdministrationJourney(SequentialTaskSet):
    """Create Order -> Confirm payment -> Paid -> Shipped -> Completed, or cancel."""

    def on_start(self):
        self.state = OrderState()

    @task
    def create_order(self):
        with self.client.post("/orders", json=order_data(), catch_response=True, name="POST /orders") as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Create order failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def record_payment(self):
        outcome = "Confirmed" if random.random() < 0.9 else "Failed"
        body = {"payment_status": outcome}
        if outcome == "Confirmed":
            body["receipt"] = mpesa_receipt()
        with self.client.put(
            f"/orders/{self.state.order_id}",
            json=body,
            catch_response=True,
            name="PUT /orders/{id} (payment)",
        ) as resp:
            if resp.status_code == 200:
                self.state.payment_status = outcome
            else:
                resp.failure(f"Record payment failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def fulfil(self):
        path = ["Paid", "Shipped", "Completed"] if self.state.payment_status == "Confirmed" else ["Cancelled"]
        for status in path:
            with self.client.put(
                f"/orders/{self.state.order_id}",
                json={"status": status},
                catch_response=True,
                name="PUT /orders/{id} (status)",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Move to {status} failed: {resp.status_code} - {extract_error_detail(resp)}")
                    return
                self.state.current_status = status

    @task
    def review(self):
        self.client.get("/orders/manage", params={"payment": "unpaid"}, name="GET /orders/manage")
        self.client.get("/orders/dashboard", name="GET /orders/dashboard")

    @task
    def done(self):
        self.interrupt()


class BackOfficeUser(HttpUser):
    tasks = {ProductManagementJourney: 1, OrderAdministrationJourney: 2}
    wait_time = between(1.0, 3.0)
