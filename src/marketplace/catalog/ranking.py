"""Catalog ranking — read-only ranked and filtered listings of catalog items.

The fixed rankings return at most ``RANKING_LIMIT`` items and are not
paginated. ``latest_items`` is the one offset-paginated listing.

Note the tie-breaks: ``recommended`` orders by rating then units sold, while
``most_popular`` orders by units sold then rating.
"""

import heapq
from datetime import datetime

from protean.utils.globals import current_domain

from marketplace.catalog.item import CatalogItem, EventStatus, ItemType
from marketplace.catalog.views import item_card
from marketplace.shared.clock import utc_now_or
from marketplace.shared.pagination import MAX_PAGE_SIZE, non_negative_int, positive_int, total_pages
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

RANKING_LIMIT = 10


def _repository():
    return current_domain.repository_for(CatalogItem)


def _score(value) -> float:
    # Missing values sort below every real value
    return float("-inf") if value is None else value


def recommended() -> list[dict]:
    """Highest rated first, ties broken by units sold.

    Unrated items only fill the places rated items leave open.
    """
    repository = _repository()
    candidates = repository.top("ratings", RANKING_LIMIT, review_count__gt=0)
    if len(candidates) < RANKING_LIMIT:
        candidates += repository.top("sold_out", RANKING_LIMIT - len(candidates), review_count=0)
    items = heapq.nlargest(
        RANKING_LIMIT,
        candidates,
        key=lambda item: (_score(item.ratings), _score(item.sold_out)),
    )
    return [item_card(item) for item in items]


def most_popular() -> list[dict]:
    """Most units sold first, ties broken by rating."""
    items = heapq.nlargest(
        RANKING_LIMIT,
        _repository().top("sold_out", RANKING_LIMIT),
        key=lambda item: (_score(item.sold_out), _score(item.ratings)),
    )
    return [item_card(item) for item in items]


def top_offers() -> list[dict]:
    """Largest discount percentage first.

    Items without both prices (or with a zero original price) have no
    discount percentage and are left out.
    """
    offers = heapq.nlargest(
        RANKING_LIMIT,
        (item for item in _repository().iter_batches() if item.discount_percentage is not None),
        key=lambda item: item.discount_percentage,
    )
    return [{**item_card(item), "discount_percentage": item.discount_percentage} for item in offers]


def flash_sale(now: datetime | None = None) -> list[dict]:
    """Running events whose window contains ``now``, earliest listed first.

    A naive ``now`` is taken to be UTC.
    """
    now = utc_now_or(now)
    live = []
    events = _repository().iter_batches(
        order_by="created_at",
        item_type=ItemType.EVENT.value,
        status=EventStatus.RUNNING.value,
    )
    for item in events:
        if item.is_live(now):
            live.append(item_card(item))
            if len(live) == RANKING_LIMIT:
                break
    return live


def latest_items(shop_id=None, category=None, item_type=None, offset=0, limit=10) -> dict:
    """Newest items first, optionally restricted by shop, category, and type.

    ``None`` means "no filter" for each of the three.
    """
    offset = non_negative_int(offset, "offset")
    limit = positive_int(limit, "limit", default=10, maximum=MAX_PAGE_SIZE)

    criteria = {}
    if shop_id is not None:
        criteria["shop_id"] = str(shop_id)
    if category is not None:
        criteria["category"] = category
    if item_type is not None:
        criteria["item_type"] = item_type

    logger.debug("Listing latest items", criteria=criteria, offset=offset, limit=limit)
    items, total = _repository().page(criteria, "-created_at", offset, limit)
    return {
        "items": [item_card(item) for item in items],
        "total": total,
        "currentPage": offset // limit + 1,
        "totalPages": total_pages(total, limit),
    }


def shop_events(shop_id) -> list[dict]:
    """Every event of a shop, newest first."""
    return [item_card(item) for item in _repository().events(shop_id=str(shop_id))]


def all_events() -> list[dict]:
    """Every event across shops, newest first."""
    return [item_card(item) for item in _repository().events()]
