"""CatalogItem aggregate — a sellable product or a time-boxed promotional event.

Reviews are embedded in the item. A buyer has at most one review per item:
reviews are always addressed through a mapping keyed by the reviewer's
identity, so a resubmission updates the existing review instead of appending.
The aggregate rating (``ratings``) and the number of reviews behind it
(``review_count``) are stored and recomputed on every write;
discount percentages are never stored and are derived at query time.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import InvalidStateError, ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from marketplace.catalog.events import ItemRatingRecalculated, ReviewRecorded
from marketplace.domain import marketplace


class ItemType(Enum):
    PRODUCT = "Product"
    EVENT = "Event"


class EventStatus(Enum):
    RUNNING = "Running"
    ENDED = "Ended"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@marketplace.entity(part_of="CatalogItem")
class ItemImage:
    """An already-uploaded image; the storage key is kept for later deletion."""

    url = String(required=True, max_length=500)
    key = String(max_length=255)


@marketplace.entity(part_of="CatalogItem")
class Review:
    """A buyer's review of a catalog item."""

    user_id = Identifier(required=True)
    user_name = String(max_length=100)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text()
    product_id = Identifier(required=True)
    order_id = Identifier()
    created_at = DateTime()
    updated_at = DateTime()


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class CatalogItem:
    shop_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    item_type = String(choices=ItemType, default=ItemType.PRODUCT.value)

    # Pricing. Either may be missing on legacy listings.
    original_price = Float(min_value=0.0)
    discount_price = Float(min_value=0.0)

    stock = Integer(default=0, min_value=0)
    sold_out = Integer(default=0, min_value=0)
    images = HasMany(ItemImage)

    # Event window, only meaningful when item_type is Event
    start_date = DateTime()
    finish_date = DateTime()
    status = String(choices=EventStatus)

    ratings = Float()  # None until the first review
    review_count = Integer(default=0, min_value=0)
    reviews = HasMany(Review)

    created_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def discount_cannot_exceed_original_price(self):
        if self.original_price is not None and self.discount_price is not None:
            if self.discount_price > self.original_price:
                raise ValidationError({"discount_price": ["Discount price cannot exceed the original price"]})

    @invariant.post
    def events_need_a_valid_window(self):
        if self.item_type != ItemType.EVENT.value:
            return
        if self.start_date is None or self.finish_date is None:
            raise ValidationError({"start_date": ["Events need both a start and a finish date"]})
        if self.start_date > self.finish_date:
            raise ValidationError({"finish_date": ["Event cannot finish before it starts"]})

    @invariant.post
    def one_review_per_user(self):
        reviewers = [str(review.user_id) for review in self.reviews]
        if len(reviewers) != len(set(reviewers)):
            raise ValidationError({"reviews": ["A user can review an item only once"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        shop_id,
        name,
        item_type=ItemType.PRODUCT.value,
        description=None,
        category=None,
        original_price=None,
        discount_price=None,
        stock=0,
        sold_out=0,
        start_date=None,
        finish_date=None,
        status=None,
        images=None,
        created_at=None,
    ):
        """List a new product or event. ``images`` are resolved ``{url, key}`` dicts."""
        if item_type == ItemType.EVENT.value and status is None:
            status = EventStatus.RUNNING.value

        item = cls(
            shop_id=shop_id,
            name=name,
            item_type=item_type,
            description=description,
            category=category,
            original_price=original_price,
            discount_price=discount_price,
            stock=stock,
            sold_out=sold_out,
            start_date=start_date,
            finish_date=finish_date,
            status=status,
            created_at=created_at or datetime.now(UTC),
        )
        for image in images or []:
            item.add_images(ItemImage(url=image["url"], key=image.get("key")))
        return item

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def effective_price(self):
        """The price a buyer pays: the discount price when there is one."""
        return self.discount_price if self.discount_price is not None else self.original_price

    @property
    def discount_percentage(self):
        """Percentage off the original price, or None when it cannot be derived."""
        if self.original_price is None or self.discount_price is None or self.original_price <= 0:
            return None
        return (self.original_price - self.discount_price) / self.original_price * 100

    def is_live(self, moment) -> bool:
        """Whether this is a running event whose window contains ``moment``."""
        return (
            self.item_type == ItemType.EVENT.value
            and self.status == EventStatus.RUNNING.value
            and self.start_date is not None
            and self.finish_date is not None
            and self.start_date <= moment <= self.finish_date
        )

    def reviews_by_user(self) -> dict:
        """Reviews keyed by reviewer identity."""
        return {str(review.user_id): review for review in self.reviews}

    def review_by(self, user_id):
        return self.reviews_by_user().get(str(user_id))

    def mean_rating(self) -> float:
        """Unweighted mean of all review ratings."""
        if not self.reviews:
            raise InvalidStateError({"ratings": [f"Item {self.id} has no reviews to average"]})
        return sum(review.rating for review in self.reviews) / len(self.reviews)

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def record_review(self, user_id, rating, comment=None, user_name=None, order_id=None) -> bool:
        """Insert the user's review, or update it in place if one exists.

        Returns True when an existing review was updated.
        """
        now = datetime.now(UTC)
        existing = self.review_by(user_id)

        if existing is not None:
            existing.rating = rating
            existing.comment = comment
            if user_name is not None:
                existing.user_name = user_name
            if order_id is not None:
                existing.order_id = order_id
            existing.updated_at = now
            # Re-adding marks the child as changed for the repository
            self.add_reviews(existing)
        else:
            self.add_reviews(
                Review(
                    user_id=user_id,
                    user_name=user_name,
                    rating=rating,
                    comment=comment,
                    product_id=self.id,
                    order_id=order_id,
                    created_at=now,
                    updated_at=now,
                )
            )

        self.raise_(
            ReviewRecorded(
                item_id=str(self.id),
                user_id=str(user_id),
                order_id=str(order_id) if order_id else None,
                rating=rating,
                is_update=existing is not None,
                recorded_at=now,
            )
        )

        with atomic_change(self):
            self.ratings = self.mean_rating()
            self.review_count = len(self.reviews)
        self._raise_rating_recalculated(now)

        return existing is not None

    def recalculate_ratings(self):
        """Recompute ``ratings`` from the current reviews; None when there are none."""
        with atomic_change(self):
            self.ratings = self.mean_rating() if self.reviews else None
            self.review_count = len(self.reviews)
        self._raise_rating_recalculated(datetime.now(UTC))

    def _raise_rating_recalculated(self, moment):
        self.raise_(
            ItemRatingRecalculated(
                item_id=str(self.id),
                ratings=self.ratings,
                review_count=self.review_count,
                recalculated_at=moment,
            )
        )
