"""API layer."""

from product_api.api.error_handlers import register_error_handlers
from product_api.api.controller import product_router

__all__ = ["product_router", "register_error_handlers"]
