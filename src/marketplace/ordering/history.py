"""Order history and order detail queries for a single buyer.

Ownership is always part of the lookup predicate: another buyer's order is
indistinguishable from one that does not exist. Product fields on cart lines
are joined in at read time from the catalog and never stored on the order.
"""

from datetime import datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from marketplace.catalog.item import CatalogItem
from marketplace.catalog.views import product_summary
from marketplace.ordering.order import Order
from marketplace.shared.clock import as_utc
from marketplace.shared.pagination import MAX_PAGE_SIZE, positive_int, total_pages
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def _products_for(orders) -> dict:
    product_ids = {line.product_id for order in orders for line in order.cart}
    return current_domain.repository_for(CatalogItem).find_by_ids(product_ids)


def order_view(order, products: dict, detailed: bool = False) -> dict:
    cart = []
    for line in order.cart:
        product = products.get(str(line.product_id))
        cart.append(
            {
                "id": str(line.id),
                "product_id": str(line.product_id),
                "quantity": line.quantity,
                "price": line.price,
                "is_reviewed": bool(line.is_reviewed),
                "product": product_summary(product, detailed=detailed) if product else None,
            }
        )

    return {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "status": order.status,
        "total_price": order.total_price,
        "created_at": order.created_at,
        "cart": cart,
    }


def order_history(
    user_id,
    page=1,
    limit=10,
    status: str | None = None,
    created_from: datetime | None = None,
    created_to: datetime | None = None,
) -> dict:
    """A page of the user's orders, newest first.

    ``created_from`` and ``created_to`` are inclusive and may be given alone.
    """
    page = positive_int(page, "page", default=1)
    limit = positive_int(limit, "limit", default=10, maximum=MAX_PAGE_SIZE)
    created_from, created_to = as_utc(created_from), as_utc(created_to)
    if created_from is not None and created_to is not None and created_from > created_to:
        raise ValidationError({"created_from": ["Start of the date range is after its end"]})

    criteria = {"user_id": str(user_id)}
    if status:
        criteria["status"] = status
    if created_from is not None:
        criteria["created_at__gte"] = created_from
    if created_to is not None:
        criteria["created_at__lte"] = created_to

    logger.debug("Fetching order history", user_id=str(user_id), page=page, limit=limit, status=status)
    orders, total = current_domain.repository_for(Order).page(criteria, (page - 1) * limit, limit)
    products = _products_for(orders)

    return {
        "orders": [order_view(order, products) for order in orders],
        "pagination": {
            "currentPage": page,
            "totalPages": total_pages(total, limit),
            "totalOrders": total,
            "ordersPerPage": limit,
        },
    }


def order_details(user_id, order_id) -> dict:
    """One of the user's orders with product descriptions resolved."""
    order = current_domain.repository_for(Order).owned(order_id, user_id)
    if order is None:
        raise ObjectNotFoundError({"_entity": f"Order `{order_id}` not found"})

    return order_view(order, _products_for([order]), detailed=True)
