"""Repository port for orders."""

from enum import Enum

from marketplace.domain import marketplace
from marketplace.ordering.order import Order

BATCH_SIZE = 500


class ReviewSync(Enum):
    """Outcome of flagging an order's cart lines after a review."""

    SYNCED = "synced"
    ALREADY_SYNCED = "already_synced"
    ORDER_NOT_FOUND = "order_not_found"
    NO_MATCHING_LINE_ITEM = "no_matching_line_item"


@marketplace.repository(part_of=Order)
class OrderRepository:
    def _query(self, **criteria):
        query = self._dao.query
        return query.filter(**criteria) if criteria else query

    def owned(self, order_id, user_id) -> Order | None:
        """The order with this identity, if it belongs to ``user_id``."""
        items = self._query(id=str(order_id), user_id=str(user_id)).limit(1).all().items
        return items[0] if items else None

    def count(self, **criteria) -> int:
        return self._query(**criteria).limit(1).all().total

    def page(self, criteria: dict, offset: int, limit: int):
        """Newest-first page of matching orders plus the total number of matches."""
        result = self._query(**criteria).order_by("-created_at").offset(offset).limit(limit).all()
        return result.items, result.total

    def iter_batches(self, batch_size: int = BATCH_SIZE, **criteria):
        offset = 0
        while True:
            items = self._query(**criteria).order_by("id").offset(offset).limit(batch_size).all().items
            yield from items
            if len(items) < batch_size:
                return
            offset += batch_size

    def mark_reviewed(self, order_id, user_id, product_id) -> ReviewSync:
        """Flag the cart lines of ``product_id`` in the user's order as reviewed.

        A missing order or product line is reported, not raised.
        """
        order = self.owned(order_id, user_id)
        if order is None:
            return ReviewSync.ORDER_NOT_FOUND

        matched, changed = order.set_reviewed(product_id, True)
        if not matched:
            return ReviewSync.NO_MATCHING_LINE_ITEM
        if not changed:
            return ReviewSync.ALREADY_SYNCED

        self.add(order)
        return ReviewSync.SYNCED
