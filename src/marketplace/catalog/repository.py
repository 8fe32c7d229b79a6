"""Repository port for catalog items.

The base repository provides ``get`` and ``add``; the query shapes the
ranking engine and order analytics need are added here.
"""

from marketplace.catalog.item import CatalogItem, ItemType
from marketplace.domain import marketplace

BATCH_SIZE = 500


@marketplace.repository(part_of=CatalogItem)
class CatalogItemRepository:
    def _query(self, **criteria):
        query = self._dao.query
        return query.filter(**criteria) if criteria else query

    def find(self, **criteria) -> list[CatalogItem]:
        return self._query(**criteria).all().items

    def find_by_ids(self, ids) -> dict:
        """Items for the given identities, keyed by identity. Unknown ids are absent."""
        ids = sorted({str(identity) for identity in ids if identity})
        if not ids:
            return {}
        items = self._dao.query.filter(id__in=ids).limit(len(ids)).all().items
        return {str(item.id): item for item in items}

    def count(self, **criteria) -> int:
        return self._query(**criteria).limit(1).all().total

    def page(self, criteria: dict, order_by: str, offset: int, limit: int):
        """One page of matching items plus the total number of matches."""
        result = self._query(**criteria).order_by(order_by).offset(offset).limit(limit).all()
        return result.items, result.total

    def iter_batches(self, batch_size: int = BATCH_SIZE, order_by: str = "id", **criteria):
        """Yield every matching item in ``order_by`` order, fetching ``batch_size`` at a time."""
        offset = 0
        while True:
            items = self._query(**criteria).order_by(order_by).offset(offset).limit(batch_size).all().items
            yield from items
            if len(items) < batch_size:
                return
            offset += batch_size

    def top(self, field: str, limit: int, **criteria) -> list[CatalogItem]:
        """The ``limit`` items with the highest ``field``, plus every item tied with the last of them.

        Reads at most ``limit`` items plus the ties at the cutoff, so callers
        can apply secondary sort keys in memory. ``field`` must never be None
        among the matching items.
        """
        head = self._query(**criteria).order_by(f"-{field}").limit(limit).all().items
        if len(head) < limit:
            return head
        cutoff = getattr(head[-1], field)
        above = [item for item in head if getattr(item, field) != cutoff]
        return above + list(self.iter_batches(**criteria, **{field: cutoff}))

    def events(self, **criteria) -> list[CatalogItem]:
        """Every event matching ``criteria``, newest first."""
        criteria["item_type"] = ItemType.EVENT.value
        return sorted(
            self.iter_batches(**criteria),
            key=lambda item: item.created_at,
            reverse=True,
        )
