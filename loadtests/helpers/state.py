"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state. Ids returned by creation
endpoints are stored so later steps in the journey can use them.
"""

from dataclasses import dataclass, field


@dataclass
class ProductState:
    product_id: str | None = None
    price_cents: int = 0
    is_active: bool = True


@dataclass
class ShopperState:
    """One shopper's trip from browsing to tracking an order."""

    cart_id: str | None = None
    seen_product_ids: list[str] = field(default_factory=list)
    line_count: int = 0
    order_id: str | None = None


@dataclass
class OrderState:
    order_id: str | None = None
    current_status: str = "Pending"
    payment_status: str = "Pending"
