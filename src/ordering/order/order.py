"""Order aggregate: the record created at checkout.

An order keeps an immutable snapshot of what was bought and two independent
status tracks:

Fulfillment:
    PENDING → PAID → SHIPPED → COMPLETED
    CANCELLED from any non-terminal state

Payment:
    PENDING → CONFIRMED | FAILED

Confirming a payment never moves fulfillment, and the reverse holds too.
Administrators may force a fulfillment change outside the graph.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.events import (
    FulfillmentStatusChanged,
    OrderPlaced,
    PaymentConfirmed,
    PaymentFailed,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class FulfillmentStatus(Enum):
    PENDING = "Pending"
    PAID = "Paid"
    SHIPPED = "Shipped"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class PaymentStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    FAILED = "Failed"


# State machine transition maps
_FULFILLMENT_TRANSITIONS = {
    FulfillmentStatus.PENDING: {FulfillmentStatus.PAID, FulfillmentStatus.CANCELLED},
    FulfillmentStatus.PAID: {FulfillmentStatus.SHIPPED, FulfillmentStatus.CANCELLED},
    FulfillmentStatus.SHIPPED: {FulfillmentStatus.COMPLETED, FulfillmentStatus.CANCELLED},
    FulfillmentStatus.COMPLETED: set(),  # Terminal
    FulfillmentStatus.CANCELLED: set(),  # Terminal
}

_PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.CONFIRMED, PaymentStatus.FAILED},
    PaymentStatus.CONFIRMED: set(),  # Terminal
    PaymentStatus.FAILED: set(),  # Terminal
}


def _as_fulfillment_status(value):
    try:
        return FulfillmentStatus(value.value if isinstance(value, FulfillmentStatus) else value)
    except ValueError:
        allowed = ", ".join(s.value for s in FulfillmentStatus)
        raise ValidationError({"status": [f"Unknown order status '{value}'. Expected one of: {allowed}"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class PaymentDetails:
    """Mobile-money payment state for an order.

    ``phone`` is the number the payment prompt goes to. ``receipt`` is the
    M-Pesa confirmation code recorded by an administrator.
    """

    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    receipt = String(max_length=50)
    phone = String(max_length=20)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A line of the order, copied from the cart at checkout.

    It does not follow the live product: later price or title changes in the
    catalogue leave it untouched.
    """

    product_id = Identifier()
    title = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Integer(required=True, min_value=0)
    image = String(max_length=500)

    def line_total(self):
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_name = String(required=True, max_length=255)
    phone = String(required=True, max_length=20)
    address = String(required=True, max_length=500)
    email = String(max_length=254)
    notes = String(max_length=1000)
    status = String(
        choices=FulfillmentStatus,
        default=FulfillmentStatus.PENDING.value,
    )
    items = HasMany(OrderItem)
    payment = ValueObject(PaymentDetails)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_name,
        phone,
        address,
        items_data,
        email=None,
        notes=None,
        payment_phone=None,
        order_id=None,
        placed_at=None,
    ):
        """Create an order from a snapshot of cart lines.

        Args:
            items_data: List of dicts with product_id, title, quantity,
                        unit_price and image.
            payment_phone: Number for the payment prompt. When given the order
                           starts with a Pending payment record.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = placed_at or datetime.now(UTC)
        attributes = {"id": order_id} if order_id else {}

        order = cls(
            customer_name=customer_name,
            phone=phone,
            address=address,
            email=email,
            notes=notes,
            status=FulfillmentStatus.PENDING.value,
            payment=PaymentDetails(status=PaymentStatus.PENDING.value, phone=payment_phone) if payment_phone else None,
            created_at=now,
            updated_at=now,
            **attributes,
        )
        for item in items_data:
            order.add_items(
                OrderItem(
                    product_id=item.get("product_id"),
                    title=item["title"],
                    quantity=item["quantity"],
                    unit_price=item["unit_price"],
                    image=item.get("image"),
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_name=order.customer_name,
                phone=order.phone,
                items=json.dumps(order.snapshot()),
                item_count=order.item_count(),
                total=order.total(),
                payment_status=order.current_payment_status(),
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    def total(self):
        return sum(item.line_total() for item in self.items)

    def item_count(self):
        return sum(item.quantity for item in self.items)

    def snapshot(self):
        return [
            {
                "product_id": str(item.product_id) if item.product_id else None,
                "title": item.title,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "image": item.image,
            }
            for item in self.items
        ]

    def current_payment_status(self):
        """Payment state for display. A missing payment record reads as Pending."""
        if self.payment is None or not self.payment.status:
            return PaymentStatus.PENDING.value
        return self.payment.status

    def is_paid(self):
        return self.current_payment_status() == PaymentStatus.CONFIRMED.value

    def is_terminal(self):
        return not _FULFILLMENT_TRANSITIONS[FulfillmentStatus(self.status)]

    # -------------------------------------------------------------------
    # Fulfillment track
    # -------------------------------------------------------------------
    def can_change_status_to(self, target):
        target = _as_fulfillment_status(target)
        return target in _FULFILLMENT_TRANSITIONS[FulfillmentStatus(self.status)]

    def change_status(self, target, force=False):
        """Move the fulfillment status.

        Without ``force`` only edges of the transition graph are allowed.
        ``force`` lets an administrator set any status, but setting the
        current status again is still rejected.
        """
        target = _as_fulfillment_status(target)
        current = FulfillmentStatus(self.status)

        if target == current:
            raise ValidationError({"status": [f"Order is already {current.value}"]})

        allowed = target in _FULFILLMENT_TRANSITIONS[current]
        if not allowed and not force:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            FulfillmentStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                forced=not allowed,
                changed_at=now,
            )
        )

    def cancel(self):
        self.change_status(FulfillmentStatus.CANCELLED)

    # -------------------------------------------------------------------
    # Payment track
    # -------------------------------------------------------------------
    def _assert_can_record_payment(self, target, force):
        current = PaymentStatus(self.current_payment_status())
        if force:
            return
        if target not in _PAYMENT_TRANSITIONS[current]:
            raise ValidationError({"payment": [f"Cannot change payment from {current.value} to {target.value}"]})

    def confirm_payment(self, receipt=None, force=False):
        """Record a confirmed M-Pesa payment with its receipt code."""
        self._assert_can_record_payment(PaymentStatus.CONFIRMED, force)

        receipt = (receipt or "").strip().upper() or None
        now = datetime.now(UTC)
        self.payment = PaymentDetails(
            status=PaymentStatus.CONFIRMED.value,
            receipt=receipt,
            phone=self.payment.phone if self.payment else None,
        )
        self.updated_at = now

        self.raise_(
            PaymentConfirmed(
                order_id=str(self.id),
                receipt=receipt,
                confirmed_at=now,
            )
        )

    def fail_payment(self, force=False):
        self._assert_can_record_payment(PaymentStatus.FAILED, force)

        now = datetime.now(UTC)
        self.payment = PaymentDetails(
            status=PaymentStatus.FAILED.value,
            phone=self.payment.phone if self.payment else None,
        )
        self.updated_at = now

        self.raise_(
            PaymentFailed(
                order_id=str(self.id),
                failed_at=now,
            )
        )
