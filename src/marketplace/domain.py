"""Marketplace bounded context — catalog items, event reviews, and order analytics.

Owns the review reconciliation between a catalog item, its aggregate rating,
and the originating order's line items, plus the read-side analytics over
orders and the catalog rankings.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
