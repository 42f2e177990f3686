"""Back-office order list: search, filters, sort and pages."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.order.order import FulfillmentStatus, Order, PaymentStatus
from shared.listing import DEFAULT_PAGE_SIZE, contains_text, paginate, sort_by

PAYMENT_FILTERS = {
    "all": lambda order: True,
    "paid": lambda order: order.is_paid(),
    "cancelled": lambda order: order.status == FulfillmentStatus.CANCELLED.value,
    "unpaid": lambda order: (
        order.current_payment_status() != PaymentStatus.CONFIRMED.value and order.status != FulfillmentStatus.CANCELLED.value
    ),
}

SORT_KEYS = {
    "created": lambda order: order.created_at,
    "total": lambda order: order.total(),
    "name": lambda order: (order.customer_name or "").lower(),
    "status": lambda order: order.status,
}


def all_orders():
    """Every order, newest first."""
    orders = current_domain.repository_for(Order)._dao.query.limit(None).all().items
    return sorted(orders, key=lambda order: order.created_at, reverse=True)


def filter_orders(orders, search=None, status=None, payment="all"):
    if payment not in PAYMENT_FILTERS:
        raise ValidationError({"payment": [f"Unknown payment filter '{payment}'"]})
    if status in (None, "", "all"):
        status = None
    elif status not in {s.value for s in FulfillmentStatus}:
        raise ValidationError({"status": [f"Unknown order status filter '{status}'"]})

    by_payment = PAYMENT_FILTERS[payment]
    return [
        order
        for order in orders
        if (status is None or order.status == status)
        and by_payment(order)
        and contains_text(search, str(order.id), order.customer_name, order.phone)
    ]


def list_orders(
    orders=None,
    search=None,
    status=None,
    payment="all",
    sort="created",
    descending=True,
    page=1,
    page_size=DEFAULT_PAGE_SIZE,
):
    if orders is None:
        orders = all_orders()

    matching = filter_orders(orders, search=search, status=status, payment=payment)
    return paginate(sort_by(matching, SORT_KEYS, sort, descending), page, page_size)
