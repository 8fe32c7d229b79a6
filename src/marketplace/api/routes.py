"""FastAPI routes for the marketplace.

Thin adapters: authentication happens upstream and the caller's identity
arrives in the ``X-User-Id`` header. Wire sentinels (``"0"``, ``"all"``) are
translated into ``None`` here so the engines only ever see real filters.
"""

from datetime import datetime

from fastapi import APIRouter, Header

from marketplace.api.schemas import (
    ItemListResponse,
    LatestItemsResponse,
    OrderDetailResponse,
    OrderHistoryResponse,
    OrderStatsResponse,
    ResyncReceiptResponse,
    ResyncReviewRequest,
    ReviewReceiptResponse,
    SubmitReviewRequest,
)
from marketplace.catalog import ranking
from marketplace.catalog.reviewing import resync_review, submit_review
from marketplace.ordering.history import order_details, order_history
from marketplace.ordering.stats import order_stats

ALL_SHOPS = "0"
ALL_CATEGORIES = "0"
ALL_TYPES = "all"

event_router = APIRouter(prefix="/events", tags=["events"])
product_router = APIRouter(prefix="/products", tags=["products"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _unless(value: str | None, sentinel: str) -> str | None:
    return None if value in (None, "", sentinel) else value


# ---------------------------------------------------------------------------
# Events & reviews
# ---------------------------------------------------------------------------
@event_router.put("/reviews", response_model=ReviewReceiptResponse)
async def create_review(
    body: SubmitReviewRequest,
    x_user_id: str = Header(...),
) -> ReviewReceiptResponse:
    """Record the caller's review of an event and flag the order line."""
    receipt = submit_review(
        user_id=x_user_id,
        product_id=body.product_id,
        order_id=body.order_id,
        rating=body.rating,
        comment=body.comment,
        user_name=body.user_name,
    )
    return ReviewReceiptResponse(**receipt)


@event_router.post("/reviews/resync", response_model=ResyncReceiptResponse)
async def resync_event_review(body: ResyncReviewRequest) -> ResyncReceiptResponse:
    """Recompute rating and review flag for a product/order pair."""
    return ResyncReceiptResponse(**resync_review(product_id=body.product_id, order_id=body.order_id))


@event_router.get("", response_model=ItemListResponse)
async def list_events() -> ItemListResponse:
    return ItemListResponse(items=ranking.all_events())


@event_router.get("/flash-sale", response_model=ItemListResponse)
async def flash_sale_items() -> ItemListResponse:
    return ItemListResponse(items=ranking.flash_sale())


@event_router.get("/shop/{shop_id}", response_model=ItemListResponse)
async def list_shop_events(shop_id: str) -> ItemListResponse:
    return ItemListResponse(items=ranking.shop_events(shop_id))


# ---------------------------------------------------------------------------
# Catalog rankings
# ---------------------------------------------------------------------------
@product_router.get("/recommended", response_model=ItemListResponse)
async def recommended_products() -> ItemListResponse:
    return ItemListResponse(items=ranking.recommended())


@product_router.get("/top-offers", response_model=ItemListResponse)
async def top_offers() -> ItemListResponse:
    return ItemListResponse(items=ranking.top_offers())


@product_router.get("/most-popular", response_model=ItemListResponse)
async def most_popular_products() -> ItemListResponse:
    return ItemListResponse(items=ranking.most_popular())


@product_router.get("/latest", response_model=LatestItemsResponse)
async def latest_products(
    store_id: str | None = None,
    category_id: str | None = None,
    type: str | None = None,  # noqa: A002
    offset: str | None = None,
    limit: str | None = None,
) -> LatestItemsResponse:
    result = ranking.latest_items(
        shop_id=_unless(store_id, ALL_SHOPS),
        category=_unless(category_id, ALL_CATEGORIES),
        item_type=_unless(type, ALL_TYPES),
        offset=offset,
        limit=limit,
    )
    return LatestItemsResponse(**result)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.get("/history", response_model=OrderHistoryResponse)
async def get_order_history(
    x_user_id: str = Header(...),
    page: str | None = None,
    limit: str | None = None,
    status: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> OrderHistoryResponse:
    result = order_history(
        x_user_id,
        page=page,
        limit=limit,
        status=status,
        created_from=start_date,
        created_to=end_date,
    )
    return OrderHistoryResponse(**result)


@order_router.get("/stats", response_model=OrderStatsResponse)
async def get_order_stats(x_user_id: str = Header(...)) -> OrderStatsResponse:
    return OrderStatsResponse(stats=order_stats(x_user_id))


@order_router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order_details(order_id: str, x_user_id: str = Header(...)) -> OrderDetailResponse:
    return OrderDetailResponse(order=order_details(x_user_id, order_id))
