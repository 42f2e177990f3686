"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.order.order import Order
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    return ShoppingCart.create(session_id="sess-bdd")


@given(parsers.cfparse('a placed order for "{name}" totalling {total:d}'), target_fixture="order")
def placed_order(name, total):
    return Order.place(
        customer_name=name,
        phone="254722690154",
        address="Moi Avenue, Nairobi",
        items_data=[{"product_id": "P", "title": "Product P", "quantity": 1, "unit_price": total}],
        payment_phone="254722690154",
    )


@given(parsers.cfparse('the order is "{status}"'))
def order_at_status(order, status):
    order.status = status


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the change is rejected")
def change_rejected(error):
    assert isinstance(error["exc"], ValidationError)
