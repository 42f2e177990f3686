"""Back-office product list: search, status filter, sort and pages."""

from protean.exceptions import ValidationError

from catalogue.product.browsing import catalogue_products, in_category
from shared.listing import DEFAULT_PAGE_SIZE, contains_text, paginate, sort_by

LOW_STOCK_THRESHOLD = 5

STATUS_FILTERS = {
    "all": lambda product: True,
    "active": lambda product: product.is_active,
    "inactive": lambda product: not product.is_active,
    "out": lambda product: product.stock <= 0,
}

SORT_KEYS = {
    "title": lambda product: (product.title or "").lower(),
    "price": lambda product: product.price_cents,
    "stock": lambda product: product.stock,
    "created": lambda product: product.sequence,
}


def filter_products(products, search=None, category=None, status="all"):
    if status not in STATUS_FILTERS:
        raise ValidationError({"status": [f"Unknown status filter '{status}'"]})

    by_category = in_category(category)
    by_status = STATUS_FILTERS[status]
    return [
        product
        for product in products
        if by_category(product)
        and by_status(product)
        and contains_text(search, product.title, product.brand, product.sku)
    ]


def list_products(
    products=None,
    search=None,
    category=None,
    status="all",
    sort="created",
    descending=False,
    page=1,
    page_size=DEFAULT_PAGE_SIZE,
):
    """Filter, sort and page the full product list, inactive products included."""
    if products is None:
        products = catalogue_products()

    matching = filter_products(products, search=search, category=category, status=status)
    return paginate(sort_by(matching, SORT_KEYS, sort, descending), page, page_size)


def inventory_summary(products=None, threshold=LOW_STOCK_THRESHOLD):
    """Figures for the inventory card on the admin dashboard."""
    if products is None:
        products = catalogue_products()

    low_stock = sorted(
        (product for product in products if product.stock <= threshold),
        key=lambda product: (product.stock, product.sequence),
    )
    return {
        "product_count": len(products),
        "active_count": sum(1 for product in products if product.is_active),
        "out_of_stock_count": sum(1 for product in products if product.stock <= 0),
        "low_stock": low_stock,
    }
