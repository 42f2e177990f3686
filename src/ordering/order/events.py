"""Domain events for the Order aggregate.

Projectors build the customer tracking view from these events.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A new order was placed from a checkout snapshot."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_name = String(required=True)
    phone = String(required=True)
    items = Text(required=True)  # JSON: list of line snapshots
    item_count = Integer(required=True)
    total = Integer(required=True)
    payment_status = String(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class FulfillmentStatusChanged:
    """An administrator moved the order along the fulfillment track.

    ``forced`` is set when the change skipped the transition graph.
    """

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    forced = Boolean(default=False)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentConfirmed:
    """The M-Pesa payment for the order was confirmed."""

    __version__ = 1

    order_id = Identifier(required=True)
    receipt = String()
    confirmed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class PaymentFailed:
    """The M-Pesa payment for the order failed."""

    __version__ = 1

    order_id = Identifier(required=True)
    failed_at = DateTime(required=True)
