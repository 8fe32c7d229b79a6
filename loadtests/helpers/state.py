"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, no cross-user sharing.
State tracks identities returned by read endpoints so follow-up requests
can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class BuyerState:
    """Tracks state for a single simulated buyer session."""

    user_id: str | None = None
    order_ids: list[str] = field(default_factory=list)
    # (product_id, order_id) pairs whose cart line is not yet reviewed
    reviewable: list[tuple[str, str]] = field(default_factory=list)
    reviews_submitted: int = 0


@dataclass
class BrowseState:
    """Tracks items seen while browsing, for follow-up event lookups."""

    shop_ids: set[str] = field(default_factory=set)
