"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class LineItemsReviewed:
    """Cart lines of an order were flagged as reviewed for a product."""

    __version__ = 1

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    line_count = Integer(required=True)
    reviewed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class LineItemsReviewCleared:
    """A resync found no review behind flagged cart lines and cleared them."""

    __version__ = 1

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    line_count = Integer(required=True)
    cleared_at = DateTime(required=True)
