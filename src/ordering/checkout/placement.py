"""Checkout: turn a cart into an order.

The whole placement runs in one unit of work. If any step fails the order is
not stored and the cart keeps every line.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.checkout.form import validate_checkout
from ordering.domain import ordering
from ordering.order.order import Order
from ordering.utils.logging import logger


@ordering.command(part_of="Order")
class PlaceOrder:
    cart_id = Identifier(required=True)
    customer_name = String(max_length=255)
    phone = String(max_length=30)
    address = String(max_length=500)
    email = String(max_length=254)
    notes = String(max_length=1000)
    use_phone_for_payment = Boolean(default=True)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.get(command.cart_id)

        if cart.is_empty():
            raise ValidationError({"cart": ["Your cart is empty"]})

        form = validate_checkout(
            customer_name=command.customer_name,
            phone=command.phone,
            address=command.address,
            email=command.email,
            notes=command.notes,
            use_phone_for_payment=command.use_phone_for_payment is not False,
        )

        order = Order.place(
            customer_name=form["customer_name"],
            phone=form["phone"],
            address=form["address"],
            items_data=cart.snapshot(),
            email=form["email"],
            notes=form["notes"],
            payment_phone=form["payment_phone"],
        )
        current_domain.repository_for(Order).add(order)

        cart.clear(reason="checkout")
        cart_repo.add(cart)

        logger.info(
            "Order placed from cart",
            order_id=str(order.id),
            cart_id=str(cart.id),
            item_count=order.item_count(),
            total=order.total(),
        )
        return str(order.id)
