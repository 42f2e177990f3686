from datetime import UTC, date, datetime, timedelta

import pytest
from ordering.order.order import Order
from ordering.order.reporting import dashboard, percent_delta, revenue_series, top_products
from protean.exceptions import ValidationError

TODAY = date(2026, 3, 15)


def _order(days_ago, total, paid=True, title="Product P"):
    order = Order.place(
        customer_name="Jane Wanjiku",
        phone="254722690154",
        address="Moi Avenue, Nairobi",
        items_data=[{"product_id": "P", "title": title, "quantity": 1, "unit_price": total}],
        placed_at=datetime(2026, 3, 15, 10, 0, tzinfo=UTC) - timedelta(days=days_ago),
    )
    if paid:
        order.confirm_payment(receipt="ABC123")
    return order


class TestPercentDelta:
    @pytest.mark.parametrize(
        "previous, current, expected",
        [(0, 0, 0), (0, 500, 100), (100, 150, 50), (200, 100, -50), (300, 300, 0), (3, 4, 33)],
    )
    def test_percent_delta(self, previous, current, expected):
        assert percent_delta(previous, current) == expected


class TestRevenueSeries:
    def test_one_point_per_day_oldest_first(self):
        series = revenue_series([], days=7, today=TODAY)
        assert len(series) == 7
        assert series[0]["date"] == "2026-03-09"
        assert series[-1]["date"] == "2026-03-15"

    def test_only_paid_orders_count(self):
        orders = [_order(0, 1000), _order(0, 500, paid=False), _order(2, 300)]
        series = revenue_series(orders, days=3, today=TODAY)
        assert [point["revenue"] for point in series] == [300, 0, 1000]


class TestDashboard:
    def test_compares_current_and_previous_windows(self):
        orders = [
            _order(0, 1000),
            _order(6, 500),
            _order(7, 750),  # previous window
            _order(13, 250),  # previous window
            _order(14, 9999),  # outside both windows
            _order(1, 400, paid=False),
        ]
        figures = dashboard(orders, days=7, today=TODAY)

        assert figures["revenue_current"] == 1500
        assert figures["revenue_previous"] == 1000
        assert figures["revenue_delta"] == 50
        assert figures["orders_current"] == 3
        assert figures["orders_previous"] == 2
        assert figures["orders_delta"] == 50
        assert figures["paid_revenue"] == 1000 + 500 + 750 + 250 + 9999

    def test_empty_store(self):
        figures = dashboard([], days=7, today=TODAY)
        assert figures["revenue_current"] == 0
        assert figures["revenue_delta"] == 0
        assert figures["orders_delta"] == 0
        assert figures["top_products"] == []

    def test_window_must_be_positive(self):
        with pytest.raises(ValidationError):
            dashboard([], days=0, today=TODAY)


class TestTopProducts:
    def test_grouped_by_title_and_ranked_by_quantity(self):
        orders = [
            _order(0, 100, title="Wipers"),
            _order(1, 100, title="Wipers"),
            _order(2, 200, title="Seat Covers"),
            _order(3, 900, paid=False, title="Unpaid Item"),
        ]
        ranking = top_products(orders)
        assert [entry["title"] for entry in ranking] == ["Wipers", "Seat Covers"]
        assert ranking[0] == {"title": "Wipers", "quantity": 2, "revenue": 200}

    def test_limit(self):
        orders = [_order(0, 100, title=f"Item {i}") for i in range(10)]
        assert len(top_products(orders)) == 6
