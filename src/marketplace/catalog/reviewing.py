"""SubmitReview / ResyncReview — keep a review, the item rating, and the order flag in step.

A submission touches three records: the review embedded in the catalog item,
the item's stored rating, and the ``is_reviewed`` flag on the originating
order's cart lines. There is no cross-document transaction behind this; the
receipt reports how the order side went, and ``ResyncReview`` recomputes both
derived values from current state to repair drift.
"""

from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.catalog.item import CatalogItem
from marketplace.domain import marketplace
from marketplace.ordering.order import Order
from marketplace.ordering.repository import ReviewSync
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

REVIEWED_MESSAGE = "Reviewed successfully!"


@marketplace.command(part_of="CatalogItem")
class SubmitReview:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text()
    user_name = String(max_length=100)


@marketplace.command(part_of="CatalogItem")
class ResyncReview:
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)


@marketplace.command_handler(part_of=CatalogItem)
class ReviewReconciliationHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        item_repo = current_domain.repository_for(CatalogItem)
        item = item_repo.get(command.product_id)

        review_updated = item.record_review(
            user_id=command.user_id,
            rating=command.rating,
            comment=command.comment,
            user_name=command.user_name,
            order_id=command.order_id,
        )
        item_repo.add(item)

        sync = current_domain.repository_for(Order).mark_reviewed(
            command.order_id,
            command.user_id,
            command.product_id,
        )
        if sync not in (ReviewSync.SYNCED, ReviewSync.ALREADY_SYNCED):
            logger.warning(
                "Review recorded but order was not flagged",
                product_id=str(command.product_id),
                order_id=str(command.order_id),
                user_id=str(command.user_id),
                outcome=sync.value,
            )

        logger.info(
            "Review recorded",
            product_id=str(command.product_id),
            user_id=str(command.user_id),
            review_updated=review_updated,
            ratings=item.ratings,
        )
        return {
            "message": REVIEWED_MESSAGE,
            "product_id": str(item.id),
            "order_id": str(command.order_id),
            "review_updated": review_updated,
            "ratings": item.ratings,
            "review_count": len(item.reviews),
            "order_sync": sync.value,
        }

    @handle(ResyncReview)
    def resync_review(self, command):
        item_repo = current_domain.repository_for(CatalogItem)
        order_repo = current_domain.repository_for(Order)

        item = item_repo.get(command.product_id)
        order = order_repo.get(command.order_id)

        previous_ratings = item.ratings
        item.recalculate_ratings()
        item_repo.add(item)

        reviewed = item.review_by(order.user_id) is not None
        matched, changed = order.set_reviewed(command.product_id, reviewed)
        if changed:
            order_repo.add(order)

        if changed or previous_ratings != item.ratings:
            logger.info(
                "Review state repaired",
                product_id=str(item.id),
                order_id=str(order.id),
                previous_ratings=previous_ratings,
                ratings=item.ratings,
                lines_changed=changed,
            )

        return {
            "product_id": str(item.id),
            "order_id": str(order.id),
            "ratings": item.ratings,
            "review_count": len(item.reviews),
            "is_reviewed": reviewed,
            "lines_matched": matched,
            "lines_changed": changed,
        }


def submit_review(user_id, product_id, order_id, rating, comment=None, user_name=None) -> dict:
    """Process a SubmitReview command synchronously and return its receipt."""
    return current_domain.process(
        SubmitReview(
            user_id=user_id,
            product_id=product_id,
            order_id=order_id,
            rating=rating,
            comment=comment,
            user_name=user_name,
        ),
        asynchronous=False,
    )


def resync_review(product_id, order_id) -> dict:
    """Process a ResyncReview command synchronously and return its receipt."""
    return current_domain.process(ResyncReview(product_id=product_id, order_id=order_id), asynchronous=False)

