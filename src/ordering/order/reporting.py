"""Dashboard figures for the back-office.

Revenue only counts orders whose payment is confirmed. Windows are whole
calendar days ending today: the current window is the last ``days`` days
and the previous window is the ``days`` days before it.
"""

from collections import defaultdict
from datetime import UTC, date, datetime, timedelta

from protean.exceptions import ValidationError

from ordering.order.listing import all_orders

TOP_PRODUCT_LIMIT = 6


def percent_delta(previous, current):
    """Whole-number percentage change, 100 when growing from nothing."""
    if previous <= 0 and current <= 0:
        return 0
    if previous <= 0:
        return 100
    return round((current - previous) / previous * 100)


def _order_day(order):
    created = order.created_at
    return created.date() if isinstance(created, datetime) else created


def paid_revenue(orders):
    return sum(order.total() for order in orders if order.is_paid())


def revenue_series(orders, days=7, today=None):
    """Paid revenue per day for the current window, oldest day first."""
    today = today or datetime.now(UTC).date()
    by_day = defaultdict(int)
    for order in orders:
        if order.is_paid():
            by_day[_order_day(order)] += order.total()

    return [
        {"date": (today - timedelta(days=offset)).isoformat(), "revenue": by_day[today - timedelta(days=offset)]}
        for offset in range(days - 1, -1, -1)
    ]


def _in_window(order, start: date, end: date):
    return start <= _order_day(order) <= end


def top_products(orders, limit=TOP_PRODUCT_LIMIT):
    """Best sellers by quantity over paid orders, grouped by line title."""
    totals = {}
    for order in orders:
        if not order.is_paid():
            continue
        for item in order.items:
            entry = totals.setdefault(item.title, {"title": item.title, "quantity": 0, "revenue": 0})
            entry["quantity"] += item.quantity
            entry["revenue"] += item.line_total()

    return sorted(totals.values(), key=lambda entry: entry["quantity"], reverse=True)[:limit]


def dashboard(orders=None, days=7, today=None):
    """Everything the admin dashboard shows about orders."""
    if days < 1:
        raise ValidationError({"days": ["Window must be at least one day"]})

    if orders is None:
        orders = all_orders()
    today = today or datetime.now(UTC).date()

    current_start = today - timedelta(days=days - 1)
    previous_end = current_start - timedelta(days=1)
    previous_start = current_start - timedelta(days=days)

    series = revenue_series(orders, days=days, today=today)
    revenue_current = sum(point["revenue"] for point in series)
    revenue_previous = sum(
        order.total() for order in orders if order.is_paid() and _in_window(order, previous_start, previous_end)
    )
    orders_current = sum(1 for order in orders if _in_window(order, current_start, today))
    orders_previous = sum(1 for order in orders if _in_window(order, previous_start, previous_end))

    return {
        "days": days,
        "paid_revenue": paid_revenue(orders),
        "revenue_series": series,
        "revenue_current": revenue_current,
        "revenue_previous": revenue_previous,
        "revenue_delta": percent_delta(revenue_previous, revenue_current),
        "orders_current": orders_current,
        "orders_previous": orders_previous,
        "orders_delta": percent_delta(orders_previous, orders_current),
        "top_products": top_products(orders),
    }
