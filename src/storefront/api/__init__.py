"""Storefront API package."""

from storefront.api.errors import register_exception_handlers
from storefront.api.middleware import domain_context_middleware
from storefront.api.routes import order_router, product_router, user_router

__all__ = [
    "domain_context_middleware",
    "order_router",
    "product_router",
    "register_exception_handlers",
    "user_router",
]
