"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    sku: String(required=True)
    slug: String(required=True)
    title: String(required=True)
    category: String(required=True)
    price_cents: Integer(required=True)
    stock: Integer(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUpdated:
    """An administrator patched one or more product fields."""

    __version__ = 1

    product_id: Identifier(required=True)
    changed_fields: String(required=True)  # comma separated field names
    price_cents: Integer(required=True)
    stock: Integer(required=True)
    is_active: Boolean(required=True)


@catalogue.event(part_of="Product")
class StockDeducted:
    """Units of a product were sold through checkout."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
