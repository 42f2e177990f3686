"""Shopping Cart aggregate.

The cart collects product selections until checkout. Each line holds a
snapshot of the product's title, price and image taken when it was first
added, so later catalogue edits never change what the shopper sees in the
cart. Subtotal and item count are always computed from the lines.
"""

from collections import Counter
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String

from ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from ordering.domain import ordering


def clamp_quantity(quantity):
    """Quantities below one become one. Carts never hold zero or negative lines."""
    try:
        quantity = int(quantity)
    except (TypeError, ValueError):
        return 1
    return max(1, quantity)


@ordering.entity(part_of="ShoppingCart")
class CartLine:
    product_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    unit_price = Integer(required=True, min_value=0)  # smallest currency unit
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=500)
    position = Integer(default=0)  # higher is more recent

    def line_total(self):
        return self.unit_price * self.quantity


@ordering.aggregate
class ShoppingCart:
    session_id = String(max_length=255)
    items = HasMany(CartLine)
    is_open = Boolean(default=False)  # drawer visibility, cosmetic only
    next_position = Integer(default=1)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        counts = Counter(str(line.product_id) for line in self.items)
        duplicated = [product_id for product_id, count in counts.items() if count > 1]
        if duplicated:
            raise ValidationError({"items": [f"Product {duplicated[0]} appears on more than one cart line"]})

    @invariant.post
    def quantities_must_be_positive(self):
        if any(line.quantity < 1 for line in self.items):
            raise ValidationError({"quantity": ["Cart quantities must be at least 1"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id=None):
        now = datetime.now(UTC)
        return cls(
            session_id=session_id,
            is_open=False,
            next_position=1,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def lines(self):
        """Cart lines, most recently added first."""
        return sorted(self.items, key=lambda line: line.position, reverse=True)

    def line_for(self, product_id):
        return next((line for line in self.items if str(line.product_id) == str(product_id)), None)

    def subtotal(self):
        return sum(line.line_total() for line in self.items)

    def item_count(self):
        return sum(line.quantity for line in self.items)

    def is_empty(self):
        return not self.items

    def snapshot(self):
        """Plain copies of the lines, newest first, for building an order."""
        return [
            {
                "product_id": str(line.product_id),
                "title": line.title,
                "unit_price": line.unit_price,
                "quantity": line.quantity,
                "image": line.image,
            }
            for line in self.lines()
        ]

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, product_id, title, unit_price, quantity=1, image=None):
        """Add a product, or top up its quantity if it is already in the cart.

        The title, price and image are captured only when the line is first
        created. Adding also opens the cart drawer.
        """
        quantity = clamp_quantity(quantity)
        existing = self.line_for(product_id)

        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(
                CartLine(
                    product_id=product_id,
                    title=title,
                    unit_price=unit_price,
                    quantity=quantity,
                    image=image,
                    position=self.next_position,
                )
            )
            self.next_position += 1
            line_quantity = quantity

        self.is_open = True
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def set_quantity(self, product_id, new_quantity):
        """Set a line's quantity, clamped to at least one. Unknown products are ignored."""
        line = self.line_for(product_id)
        if line is None:
            return

        previous_quantity = line.quantity
        line.quantity = clamp_quantity(new_quantity)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=line.quantity,
            )
        )

    def remove_item(self, product_id):
        """Drop a line from the cart. Removing an absent product does nothing."""
        line = self.line_for(product_id)
        if line is None:
            return

        self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def clear(self, reason="manual"):
        removed = len(self.items)
        for line in list(self.items):
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                removed_lines=removed,
                reason=reason,
            )
        )

    # -------------------------------------------------------------------
    # Drawer visibility
    # -------------------------------------------------------------------
    def open(self):
        self.is_open = True

    def close(self):
        self.is_open = False
