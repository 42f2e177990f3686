"""Faker-based payloads for the Locust scenarios.

Every generator returns a body that passes the API's request schemas and
the checkout validation rules (Kenyan phone numbers, non-empty names and
addresses), so failures in a run point at the service and not at the data.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["car", "tools"]
BRANDS = ["Talex", "Bosch", "Makita", "Michelin"]
SORTS = ["pop", "new", "price-asc", "price-desc"]

# ---------- Catalogue ----------


def valid_sku(prefix: str = "LT") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def product_data(sku: str | None = None) -> dict:
    """CreateProductRequest body with one or two gallery images."""
    sku = sku or valid_sku("PROD")
    word = fake.word().capitalize()
    seed = uuid.uuid4().hex[:6]
    return {
        "sku": sku,
        "title": f"{word} {random.choice(['Seat Cover', 'Wiper Blade', 'Drill', 'Grinder', 'Floor Mat'])}",
        "brand": random.choice(BRANDS),
        "category": random.choice(CATEGORIES),
        "price_cents": random.randint(5, 2500) * 100,
        "stock": random.randint(20, 200),
        "images": [
            f"https://picsum.photos/seed/{seed}/600/400",
            {"url": f"https://picsum.photos/seed/{seed}-2/600/400", "kind": "image"},
        ][: random.randint(1, 2)],
    }


def product_patch() -> dict:
    """UpdateProductRequest body touching price and stock."""
    return {
        "price_cents": random.randint(5, 2500) * 100,
        "stock": random.randint(20, 200),
    }


def browse_params() -> dict:
    """Query string for GET /products/browse with a random mix of filters."""
    params = {"sort": random.choice(SORTS)}
    if random.random() < 0.5:
        params["category"] = random.choice(CATEGORIES)
    if random.random() < 0.3:
        params["in_stock"] = "true"
    if random.random() < 0.3:
        low = random.randint(0, 100000)
        params["min_price"] = low
        params["max_price"] = low + random.randint(0, 200000)
    return params


# ---------- Ordering ----------


def kenyan_phone() -> str:
    """Local-form mobile number, sometimes with spaces, as shoppers type it."""
    digits = f"07{random.randint(0, 99999999):08d}"
    if random.random() < 0.5:
        return f"{digits[:4]} {digits[4:7]} {digits[7:]}"
    return digits


def cart_data() -> dict:
    return {"session_id": f"sess-{uuid.uuid4().hex[:12]}"}


def checkout_data() -> dict:
    """CheckoutRequest body."""
    return {
        "customer_name": fake.name()[:255],
        "phone": kenyan_phone(),
        "address": fake.street_address()[:500],
        "email": fake.email() if random.random() < 0.6 else None,
        "notes": fake.sentence()[:1000] if random.random() < 0.2 else None,
        "use_phone_for_payment": random.random() < 0.8,
    }


def order_data(item_count: int | None = None) -> dict:
    """CreateOrderRequest body with its own line items."""
    body = checkout_data()
    body["items"] = [
        {
            "product_id": f"prod-{uuid.uuid4().hex[:8]}",
            "title": fake.word().capitalize(),
            "quantity": random.randint(1, 3),
            "unit_price": random.randint(5, 2500) * 100,
        }
        for _ in range(item_count or random.randint(1, 3))
    ]
    return body


def mpesa_receipt() -> str:
    return uuid.uuid4().hex[:10].upper()
