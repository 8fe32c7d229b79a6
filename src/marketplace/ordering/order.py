"""Order aggregate — a buyer's checkout with its cart lines.

Orders are created by checkout, which lives outside this package. The only
field mutated here is ``LineItem.is_reviewed``, flipped when the buyer
reviews the corresponding product.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String

from marketplace.domain import marketplace
from marketplace.ordering.events import LineItemsReviewCleared, LineItemsReviewed


class OrderStatus(Enum):
    PROCESSING = "Processing"
    TRANSFERRED = "Transferred to delivery partner"
    SHIPPING = "Shipping"
    ON_THE_WAY = "On the way"
    DELIVERED = "Delivered"
    PROCESSING_REFUND = "Processing refund"
    REFUND_SUCCESS = "Refund Success"


@marketplace.entity(part_of="Order")
class LineItem:
    """One cart entry of an order."""

    product_id = Identifier(required=True)
    quantity = Integer(min_value=1, default=1)
    price = Float(min_value=0.0)
    is_reviewed = Boolean(default=False)


@marketplace.aggregate
class Order:
    user_id = Identifier(required=True)
    cart = HasMany(LineItem)
    status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    total_price = Float(default=0.0, min_value=0.0)
    created_at = DateTime()

    @classmethod
    def place(cls, user_id, cart, status=OrderStatus.PROCESSING.value, total_price=None, created_at=None):
        """Build an order from ``{product_id, quantity, price}`` dicts.

        ``total_price`` defaults to the sum of the line totals.
        """
        if total_price is None:
            total_price = sum((line.get("price") or 0.0) * line.get("quantity", 1) for line in cart)

        order = cls(
            user_id=user_id,
            status=status,
            total_price=total_price,
            created_at=created_at or datetime.now(UTC),
        )
        for line in cart:
            order.add_cart(
                LineItem(
                    product_id=line["product_id"],
                    quantity=line.get("quantity", 1),
                    price=line.get("price"),
                    is_reviewed=line.get("is_reviewed", False),
                )
            )
        return order

    def lines_for(self, product_id) -> list:
        return [line for line in self.cart if str(line.product_id) == str(product_id)]

    def set_reviewed(self, product_id, reviewed: bool = True) -> tuple[int, int]:
        """Set ``is_reviewed`` on every line of ``product_id``.

        Returns ``(matched, changed)``: how many lines carry the product and
        how many of them actually changed.
        """
        lines = self.lines_for(product_id)
        changed = [line for line in lines if bool(line.is_reviewed) != reviewed]

        for line in changed:
            line.is_reviewed = reviewed
            self.add_cart(line)

        if changed:
            now = datetime.now(UTC)
            if reviewed:
                self.raise_(
                    LineItemsReviewed(
                        order_id=str(self.id),
                        product_id=str(product_id),
                        line_count=len(changed),
                        reviewed_at=now,
                    )
                )
            else:
                self.raise_(
                    LineItemsReviewCleared(
                        order_id=str(self.id),
                        product_id=str(product_id),
                        line_count=len(changed),
                        cleared_at=now,
                    )
                )

        return len(lines), len(changed)
