"""Demo data for a fresh storefront.

Seeds the demo catalogue and one paid demo order when the catalogue is
empty, and does nothing otherwise.

Usage:
    python src/manage.py seed
"""

import json

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.management import CreateProduct
from catalogue.product.product import Category, Product
from ordering.domain import ordering
from ordering.order.order import FulfillmentStatus, Order
from shared.logging import get_logger

logger = get_logger(__name__)

DEMO_ORDER_ID = "1725690123"

DEMO_PRODUCTS = [
    {
        "title": "3D Steering Wheel Covers (Assorted)",
        "slug": "3d-steering-wheel-covers",
        "sku": "SWC-3D",
        "brand": "Talex",
        "price_cents": 80000,
        "stock": 12,
        "images": ["https://picsum.photos/seed/talex-swc/600/400"],
    },
    {
        "title": "Metallic Wiper Blades (Pair)",
        "slug": "metallic-wiper-blades",
        "sku": "WIPER-METAL",
        "brand": "Talex",
        "price_cents": 45000,
        "stock": 20,
        "images": ["https://picsum.photos/seed/talex-wiper/600/400"],
    },
] + [
    {
        "title": f"Premium Car Accessory {i + 1}",
        "slug": f"premium-car-accessory-{i + 1}",
        "sku": f"SKU{i + 1}",
        "brand": "Bosch" if i % 2 else "Talex",
        "price_cents": 249900,
        "stock": 12 if i % 3 else 0,
        "images": [f"https://picsum.photos/seed/talex-{i}/600/400"],
    }
    for i in range(6)
]


def _seed_catalogue():
    product_ids = {}
    with catalogue.domain_context():
        if current_domain.repository_for(Product)._dao.query.all().items:
            return None

        for product in DEMO_PRODUCTS:
            command = CreateProduct(
                sku=product["sku"],
                title=product["title"],
                brand=product["brand"],
                category=Category.CAR.value,
                price_cents=product["price_cents"],
                stock=product["stock"],
                is_active=True,
                images=json.dumps(product["images"]),
                slug=product["slug"],
            )
            product_ids[product["sku"]] = current_domain.process(command, asynchronous=False)
    return product_ids


def _seed_demo_order(product_ids):
    with ordering.domain_context():
        repo = current_domain.repository_for(Order)
        try:
            repo.get(DEMO_ORDER_ID)
            return
        except ObjectNotFoundError:
            pass

        order = Order.place(
            order_id=DEMO_ORDER_ID,
            customer_name="Talex Customer",
            phone="254700000000",
            address="Kirinyaga Rd - Kumasi Rd Jct, Nairobi",
            payment_phone="254722690154",
            items_data=[
                {
                    "product_id": product_ids.get("SWC-3D"),
                    "title": "3D Steering Wheel Covers (Assorted)",
                    "quantity": 1,
                    "unit_price": 80000,
                    "image": "https://picsum.photos/seed/talex-swc/120/120",
                },
                {
                    "product_id": product_ids.get("WIPER-METAL"),
                    "title": "Metallic Wiper Blades (Pair)",
                    "quantity": 1,
                    "unit_price": 45900,
                    "image": "https://picsum.photos/seed/talex-wiper/120/120",
                },
            ],
        )
        order.change_status(FulfillmentStatus.PAID)
        order.confirm_payment(receipt="QHX3ABC123")
        repo.add(order)


def seed_if_empty():
    """Seed demo data into an empty catalogue. Returns True when it seeded."""
    product_ids = _seed_catalogue()
    if product_ids is None:
        logger.info("Catalogue already has products, skipping demo seed")
        return False

    _seed_demo_order(product_ids)
    logger.info("Demo data seeded", product_count=len(product_ids), order_id=DEMO_ORDER_ID)
    return True
