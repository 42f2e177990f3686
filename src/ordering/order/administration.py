"""Back-office order administration: fulfillment and payment updates."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order, PaymentStatus
from ordering.utils.logging import logger


@ordering.command(part_of="Order")
class ChangeFulfillmentStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    force = Boolean(default=False)


@ordering.command(part_of="Order")
class RecordPayment:
    """Record the outcome of the M-Pesa prompt for an order."""

    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    receipt = String(max_length=50)
    force = Boolean(default=False)


@ordering.command_handler(part_of=Order)
class OrderAdministrationHandler:
    @handle(ChangeFulfillmentStatus)
    def change_fulfillment_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        previous_status = order.status
        override = bool(command.force) and not order.can_change_status_to(command.status)

        order.change_status(command.status, force=bool(command.force))
        repo.add(order)

        if override:
            logger.warning(
                "Order status override",
                order_id=str(order.id),
                previous_status=previous_status,
                new_status=order.status,
            )

    @handle(RecordPayment)
    def record_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if command.status == PaymentStatus.CONFIRMED.value:
            order.confirm_payment(receipt=command.receipt, force=bool(command.force))
        elif command.status == PaymentStatus.FAILED.value:
            order.fail_payment(force=bool(command.force))
        else:
            raise ValidationError(
                {"status": [f"Payment can only be recorded as {PaymentStatus.CONFIRMED.value} or {PaymentStatus.FAILED.value}"]}
            )

        repo.add(order)
        logger.info("Payment recorded", order_id=str(order.id), payment_status=order.current_payment_status())
