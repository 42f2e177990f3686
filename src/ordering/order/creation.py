"""Direct order creation: command and handler.

Backs the ``createOrder`` call of the storefront API, where the caller sends
the line items itself instead of pointing at a cart.
"""

import json

from protean import handle
from protean.fields import Boolean, String, Text
from protean.utils.globals import current_domain

from ordering.checkout.form import validate_checkout
from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class CreateOrder:
    customer_name = String(max_length=255)
    phone = String(max_length=30)
    address = String(max_length=500)
    email = String(max_length=254)
    notes = String(max_length=1000)
    items = Text(required=True)  # JSON: list of {product_id, title, quantity, unit_price, image}
    use_phone_for_payment = Boolean(default=True)


@ordering.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

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
            items_data=items_data,
            email=form["email"],
            notes=form["notes"],
            payment_phone=form["payment_phone"],
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
