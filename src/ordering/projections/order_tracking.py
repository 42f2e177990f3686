"""Order tracking: the read-only view customers look up by reference."""

from protean.core.projector import on
from protean.fields import DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import (
    FulfillmentStatusChanged,
    OrderPlaced,
    PaymentConfirmed,
    PaymentFailed,
)
from ordering.order.order import FulfillmentStatus, Order, PaymentStatus

# Customer-facing progress steps, in order.
TRACKING_STEPS = [
    (FulfillmentStatus.PENDING, "Order placed"),
    (FulfillmentStatus.PAID, "Paid"),
    (FulfillmentStatus.SHIPPED, "Shipped"),
    (FulfillmentStatus.COMPLETED, "Delivered"),
]


@ordering.projection
class OrderTracking:
    order_id = Identifier(identifier=True, required=True)
    customer_name = String(required=True)
    status = String(required=True)
    payment_status = String(default=PaymentStatus.PENDING.value)
    receipt = String()
    items = Text()  # JSON: list of line snapshots
    item_count = Integer(default=0)
    total = Integer(default=0)
    placed_at = DateTime()
    updated_at = DateTime()


def tracking_steps(status):
    """Map a fulfillment status onto the progress stepper.

    A cancelled order shows only the first step as reached.
    """
    cancelled = status == FulfillmentStatus.CANCELLED.value
    keys = [step.value for step, _ in TRACKING_STEPS]
    reached_index = 0 if cancelled or status not in keys else keys.index(status)

    return {
        "cancelled": cancelled,
        "steps": [
            {"status": step.value, "label": label, "reached": index <= reached_index}
            for index, (step, label) in enumerate(TRACKING_STEPS)
        ],
        "progress": 0 if cancelled else round(100 * reached_index / (len(TRACKING_STEPS) - 1)),
    }


@ordering.projector(projector_for=OrderTracking, aggregates=[Order])
class OrderTrackingProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(OrderTracking).add(
            OrderTracking(
                order_id=event.order_id,
                customer_name=event.customer_name,
                status=FulfillmentStatus.PENDING.value,
                payment_status=event.payment_status,
                items=event.items,
                item_count=event.item_count,
                total=event.total,
                placed_at=event.created_at,
                updated_at=event.created_at,
            )
        )

    @on(FulfillmentStatusChanged)
    def on_fulfillment_status_changed(self, event):
        repo = current_domain.repository_for(OrderTracking)
        view = repo.get(event.order_id)
        view.status = event.new_status
        view.updated_at = event.changed_at
        repo.add(view)

    @on(PaymentConfirmed)
    def on_payment_confirmed(self, event):
        repo = current_domain.repository_for(OrderTracking)
        view = repo.get(event.order_id)
        view.payment_status = PaymentStatus.CONFIRMED.value
        view.receipt = event.receipt
        view.updated_at = event.confirmed_at
        repo.add(view)

    @on(PaymentFailed)
    def on_payment_failed(self, event):
        repo = current_domain.repository_for(OrderTracking)
        view = repo.get(event.order_id)
        view.payment_status = PaymentStatus.FAILED.value
        view.updated_at = event.failed_at
        repo.add(view)
