"""Pydantic request/response schemas for the marketplace API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    product_id: str
    order_id: str
    rating: int = Field(ge=1, le=5)
    comment: str | None = None
    user_name: str | None = Field(default=None, max_length=100)


class ResyncReviewRequest(BaseModel):
    product_id: str
    order_id: str


# ---------------------------------------------------------------------------
# Response Schemas (reviews)
# ---------------------------------------------------------------------------
class ReviewReceiptResponse(BaseModel):
    success: bool = True
    message: str
    product_id: str
    order_id: str
    review_updated: bool
    ratings: float | None = None
    review_count: int
    order_sync: str


class ResyncReceiptResponse(BaseModel):
    success: bool = True
    product_id: str
    order_id: str
    ratings: float | None = None
    review_count: int
    is_reviewed: bool
    lines_matched: int
    lines_changed: int


# ---------------------------------------------------------------------------
# Response Schemas (catalog)
# ---------------------------------------------------------------------------
class ImageSchema(BaseModel):
    url: str
    key: str | None = None


class ItemCardSchema(BaseModel):
    id: str
    shop_id: str
    name: str
    description: str | None = None
    category: str | None = None
    item_type: str
    original_price: float | None = None
    discount_price: float | None = None
    stock: int | None = None
    sold_out: int | None = None
    status: str | None = None
    start_date: datetime | None = None
    finish_date: datetime | None = None
    ratings: float | None = None
    review_count: int = 0
    images: list[ImageSchema] = []
    created_at: datetime | None = None
    discount_percentage: float | None = None


class ItemListResponse(BaseModel):
    success: bool = True
    items: list[ItemCardSchema]


class LatestItemsResponse(BaseModel):
    success: bool = True
    items: list[ItemCardSchema]
    total: int
    currentPage: int
    totalPages: int


# ---------------------------------------------------------------------------
# Response Schemas (orders)
# ---------------------------------------------------------------------------
class ProductSummarySchema(BaseModel):
    id: str
    name: str
    images: list[str] = []
    price: float | None = None
    description: str | None = None


class CartLineSchema(BaseModel):
    id: str
    product_id: str
    quantity: int
    price: float | None = None
    is_reviewed: bool
    product: ProductSummarySchema | None = None


class OrderSchema(BaseModel):
    id: str
    user_id: str
    status: str
    total_price: float | None = None
    created_at: datetime | None = None
    cart: list[CartLineSchema]


class PaginationSchema(BaseModel):
    currentPage: int
    totalPages: int
    totalOrders: int
    ordersPerPage: int


class OrderHistoryResponse(BaseModel):
    success: bool = True
    orders: list[OrderSchema]
    pagination: PaginationSchema


class OrderDetailResponse(BaseModel):
    success: bool = True
    order: OrderSchema


class OrderStatsSchema(BaseModel):
    totalOrders: int
    ordersByStatus: dict[str, int]
    totalSpent: float
    recentOrders: int


class OrderStatsResponse(BaseModel):
    success: bool = True
    stats: OrderStatsSchema
