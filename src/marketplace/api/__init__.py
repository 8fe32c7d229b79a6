"""Marketplace API package."""

from marketplace.api.context import domain_context_middleware
from marketplace.api.errors import register_error_handlers
from marketplace.api.routes import event_router, order_router, product_router

__all__ = [
    "domain_context_middleware",
    "event_router",
    "order_router",
    "product_router",
    "register_error_handlers",
]
