"""Back-office product management and stock deduction after checkout.

Creates, patches and deletes catalogue products. Deleting a product only
removes it from the catalogue going forward: orders hold their own snapshot
of every line item.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.product.slug import unique_slug
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)


@catalogue.command(part_of="Product")
class CreateProduct:
    sku: String(required=True, max_length=50)
    title: String(required=True, max_length=255)
    brand: String(max_length=100)
    category: String(required=True, max_length=20)
    price_cents: Integer(required=True, min_value=0)
    stock: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    images: Text()  # JSON: list of urls or {url, kind}
    slug: String(max_length=200)


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    sku: String(max_length=50)
    title: String(max_length=255)
    brand: String(max_length=100)
    category: String(max_length=20)
    price_cents: Integer(min_value=0)
    stock: Integer(min_value=0)
    is_active: Boolean()
    images: Text()  # JSON: replaces the whole gallery when present


@catalogue.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def _load_images(raw):
    if raw is None:
        return None
    return json.loads(raw) if isinstance(raw, str) else raw


@catalogue.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        repo = current_domain.repository_for(Product)
        existing = repo._dao.query.limit(None).all().items

        taken = {product.slug for product in existing}
        next_sequence = max((product.sequence or 0 for product in existing), default=0) + 1

        product = Product.create(
            sku=command.sku,
            title=command.title,
            brand=command.brand,
            category=command.category,
            price_cents=command.price_cents,
            stock=command.stock or 0,
            is_active=command.is_active if command.is_active is not None else True,
            images=_load_images(command.images),
            slug=unique_slug(command.slug or command.title, taken),
            sequence=next_sequence,
        )
        repo.add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update(
            sku=command.sku,
            title=command.title,
            brand=command.brand,
            category=command.category,
            price_cents=command.price_cents,
            stock=command.stock,
            is_active=command.is_active,
            images=_load_images(command.images),
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("Product removed from catalogue", product_id=str(command.product_id), sku=product.sku)


@catalogue.command(part_of="Product")
class DeductStock:
    """Take sold quantities out of stock, all lines or none."""

    lines: Text(required=True)  # JSON: list of {product_id, quantity}
    order_id: Text()


def availability_errors(lines):
    """Check requested quantities against the live catalogue.

    Returns a dict of product id -> message for every line that cannot be
    sold: the product is gone, inactive, or short of stock. An empty dict
    means every line is available.
    """
    repo = current_domain.repository_for(Product)
    by_id = {str(product.id): product for product in repo._dao.query.limit(None).all().items}

    errors = {}
    for line in lines:
        product_id = str(line["product_id"])
        product = by_id.get(product_id)
        if product is None:
            errors[product_id] = "This product is no longer available"
        elif not product.is_active:
            errors[product_id] = f"'{product.title}' is not currently for sale"
        elif line["quantity"] > product.stock:
            errors[product_id] = f"Only {product.stock} unit(s) of '{product.title}' left in stock"
    return errors


@catalogue.command_handler(part_of=Product)
class DeductStockHandler:
    @handle(DeductStock)
    def deduct_stock(self, command):
        lines = json.loads(command.lines)
        if not lines:
            raise ValidationError({"lines": ["At least one line is required"]})

        errors = availability_errors(lines)
        if errors:
            raise ValidationError({"lines": list(errors.values())})

        repo = current_domain.repository_for(Product)
        for line in lines:
            product = repo.get(line["product_id"])
            product.deduct_stock(line["quantity"])
            repo.add(product)

        logger.info("Stock deducted", order_id=command.order_id, line_count=len(lines))
