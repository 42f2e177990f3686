"""Ordering bounded context: Shopping Cart, Checkout and Order Lifecycle.

Handles the cart aggregate, the checkout flow that snapshots a cart into an
order, and the back-office driven fulfillment and payment tracks.
"""

import structlog
from protean.domain import Domain

from ordering.utils.logging import configure_logging

configure_logging(log_dir="logs", log_file_prefix="talex")

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
