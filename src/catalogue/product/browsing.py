"""Storefront query pipeline.

Turns the full product list into what a shopper sees. Every filter is an
independent predicate, so they compose in any order; the sort always runs
last and is stable, so ties keep catalogue order.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from catalogue.product.product import Category, Product
from shared.listing import contains_text

SORT_POPULAR = "pop"
SORT_NEWEST = "new"
SORT_PRICE_ASC = "price-asc"
SORT_PRICE_DESC = "price-desc"

SORT_OPTIONS = (SORT_POPULAR, SORT_NEWEST, SORT_PRICE_ASC, SORT_PRICE_DESC)


def is_listed(product):
    return bool(product.is_active)


def in_category(category):
    if isinstance(category, Category):
        category = category.value
    return lambda product: category is None or product.category == category


def in_price_range(min_price=None, max_price=None):
    def predicate(product):
        if min_price is not None and product.price_cents < min_price:
            return False
        if max_price is not None and product.price_cents > max_price:
            return False
        return True

    return predicate


def in_stock(required):
    return lambda product: not required or product.stock > 0


def matches_search(term):
    return lambda product: contains_text(term, product.title, product.brand)


def sort_products(products, sort=SORT_POPULAR):
    """Order the filtered products for display.

    Popularity is catalogue insertion order. Newest reverses it.
    """
    if sort == SORT_POPULAR:
        return sorted(products, key=lambda p: p.sequence)
    if sort == SORT_NEWEST:
        return sorted(products, key=lambda p: p.sequence, reverse=True)
    if sort == SORT_PRICE_ASC:
        return sorted(products, key=lambda p: p.price_cents)
    if sort == SORT_PRICE_DESC:
        # Negated key keeps ties in catalogue order.
        return sorted(products, key=lambda p: -p.price_cents)

    raise ValidationError({"sort": [f"Unknown sort option '{sort}'. Expected one of: {', '.join(SORT_OPTIONS)}"]})


def browse(
    products,
    category=None,
    min_price=None,
    max_price=None,
    in_stock_only=False,
    search=None,
    sort=SORT_POPULAR,
):
    """Run the storefront pipeline over an in-memory product list."""
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValidationError({"price": ["Minimum price cannot exceed maximum price"]})

    predicates = [
        is_listed,
        in_category(category),
        in_price_range(min_price, max_price),
        in_stock(in_stock_only),
        matches_search(search),
    ]
    visible = [product for product in products if all(predicate(product) for predicate in predicates)]
    return sort_products(visible, sort)


def catalogue_products():
    """All products in catalogue order, inactive ones included."""
    products = current_domain.repository_for(Product)._dao.query.limit(None).all().items
    return sorted(products, key=lambda p: p.sequence)


def browse_catalogue(**filters):
    return browse(catalogue_products(), **filters)


def price_bounds(products=None):
    """Lowest and highest price among listed products, or (0, 0) when none are listed."""
    if products is None:
        products = catalogue_products()

    prices = [product.price_cents for product in products if is_listed(product)]
    if not prices:
        return 0, 0
    return min(prices), max(prices)
