"""Application tests for cart commands processed through the domain."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.management import ClearCart, CreateCart, SetCartVisibility
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _create_cart():
    return current_domain.process(CreateCart(session_id="sess-001"), asynchronous=False)


def _add(cart_id, product_id="P", unit_price=500, quantity=1):
    current_domain.process(
        AddToCart(
            cart_id=cart_id,
            product_id=product_id,
            title=f"Product {product_id}",
            unit_price=unit_price,
            quantity=quantity,
        ),
        asynchronous=False,
    )


def _cart(cart_id):
    return current_domain.repository_for(ShoppingCart).get(cart_id)


class TestCartCommands:
    def test_create_cart(self):
        cart = _cart(_create_cart())
        assert cart.session_id == "sess-001"
        assert cart.is_empty()

    def test_add_persists_line(self):
        cart_id = _create_cart()
        _add(cart_id, "P", 500, 2)
        _add(cart_id, "Q", 1200)

        cart = _cart(cart_id)
        assert cart.subtotal() == 2200
        assert cart.item_count() == 3
        assert cart.is_open is True

    def test_add_same_product_tops_up(self):
        cart_id = _create_cart()
        _add(cart_id, "P", 500, 2)
        _add(cart_id, "P", 500, 1)
        cart = _cart(cart_id)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_update_quantity_clamps(self):
        cart_id = _create_cart()
        _add(cart_id, "P", 500, 4)
        current_domain.process(UpdateCartQuantity(cart_id=cart_id, product_id="P", new_quantity=0), asynchronous=False)
        assert _cart(cart_id).items[0].quantity == 1

    def test_remove_item(self):
        cart_id = _create_cart()
        _add(cart_id, "P")
        current_domain.process(RemoveFromCart(cart_id=cart_id, product_id="P"), asynchronous=False)
        assert _cart(cart_id).is_empty()

    def test_clear_cart(self):
        cart_id = _create_cart()
        _add(cart_id, "P")
        _add(cart_id, "Q")
        current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
        assert _cart(cart_id).is_empty()

    def test_visibility(self):
        cart_id = _create_cart()
        _add(cart_id, "P")
        current_domain.process(SetCartVisibility(cart_id=cart_id, is_open=False), asynchronous=False)
        assert _cart(cart_id).is_open is False
        assert len(_cart(cart_id).items) == 1

    def test_unknown_cart(self):
        with pytest.raises(ObjectNotFoundError):
            _add("missing-cart")
