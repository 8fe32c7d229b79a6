"""Domain events for the CatalogItem aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer

from marketplace.domain import marketplace


@marketplace.event(part_of="CatalogItem")
class ReviewRecorded:
    """A buyer's review was inserted into or updated on a catalog item."""

    __version__ = 1

    item_id = Identifier(required=True)
    user_id = Identifier(required=True)
    order_id = Identifier()
    rating = Integer(required=True)
    is_update = Boolean(default=False)
    recorded_at = DateTime(required=True)


@marketplace.event(part_of="CatalogItem")
class ItemRatingRecalculated:
    """The stored aggregate rating was recomputed from the item's reviews."""

    __version__ = 1

    item_id = Identifier(required=True)
    ratings = Float()  # None when the item has no reviews
    review_count = Integer(required=True)
    recalculated_at = DateTime(required=True)
