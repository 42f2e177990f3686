"""In-process access to the Catalogue context from Ordering.

Ordering never touches catalogue aggregates directly. It asks this client
for product snapshots, availability and stock deduction, and the client runs
each call inside the catalogue domain context.
"""

import json

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.management import DeductStock, availability_errors
from catalogue.product.product import Product
from ordering.utils.logging import logger


class CatalogueClient:
    def __init__(self, domain=catalogue):
        self.domain = domain

    def product_snapshot(self, product_id) -> dict:
        """Title, price and image of a sellable product.

        Unknown ids raise ObjectNotFoundError. Inactive products raise
        ValidationError because they cannot be added to a cart.
        """
        with self.domain.domain_context():
            product = current_domain.repository_for(Product).get(product_id)
            if not product.is_active:
                raise ValidationError({"product_id": [f"'{product.title}' is not currently for sale"]})

            return {
                "product_id": str(product.id),
                "title": product.title,
                "unit_price": product.price_cents,
                "image": product.primary_image_url(),
            }

    def availability_errors(self, lines) -> dict:
        with self.domain.domain_context():
            return availability_errors(lines)

    def deduct_stock(self, order_id, lines) -> bool:
        """Take the sold quantities out of catalogue stock.

        Runs after the order is committed, so a shortfall here cannot undo
        the sale. It is logged for the back-office and False is returned.
        """
        payload = [{"product_id": line["product_id"], "quantity": line["quantity"]} for line in lines]
        try:
            with self.domain.domain_context():
                current_domain.process(
                    DeductStock(lines=json.dumps(payload), order_id=str(order_id)),
                    asynchronous=False,
                )
        except ValidationError as exc:
            logger.warning("Stock deduction failed for placed order", order_id=str(order_id), errors=exc.messages)
            return False

        logger.info("Stock deducted for order", order_id=str(order_id), line_count=len(payload))
        return True
