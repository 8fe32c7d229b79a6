"""Per-buyer order statistics."""

import calendar
from collections import Counter
from datetime import datetime

from protean.utils.globals import current_domain

from marketplace.ordering.order import Order
from marketplace.shared.clock import as_utc, utc_now_or

RECENT_MONTHS = 6


def months_before(moment: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping the day to the target month.

    31 August minus six months is 28 (or 29) February, not a fixed 180 days.
    """
    year, month_index = divmod(moment.year * 12 + (moment.month - 1) - months, 12)
    month = month_index + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def count_orders_since(user_id, since: datetime) -> int:
    """Number of the user's orders created at or after ``since``."""
    return current_domain.repository_for(Order).count(user_id=str(user_id), created_at__gte=as_utc(since))


def order_stats(user_id, now: datetime | None = None) -> dict:
    """Totals across all of the user's orders.

    ``ordersByStatus`` only lists statuses that have at least one order, and
    ``totalSpent`` is 0 for a user without orders.
    """
    now = utc_now_or(now)

    total_orders = 0
    total_spent = 0
    by_status = Counter()
    for order in current_domain.repository_for(Order).iter_batches(user_id=str(user_id)):
        total_orders += 1
        by_status[order.status] += 1
        total_spent += order.total_price or 0

    return {
        "totalOrders": total_orders,
        "ordersByStatus": dict(by_status),
        "totalSpent": total_spent,
        "recentOrders": count_orders_since(user_id, months_before(now, RECENT_MONTHS)),
    }
