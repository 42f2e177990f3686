"""Catalogue bounded context: products, pricing and stock.

Owns the product list that the storefront browses and the back-office
manages. Orders never reference live products, they hold snapshots.
"""

from protean.domain import Domain

from catalogue.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_dir="logs", log_file_prefix="talex")

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
