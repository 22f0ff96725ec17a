"""API controllers."""

from product_api.api.controller.product_controller import (
    get_product_repository,
    router as product_router,
)

__all__ = ["get_product_repository", "product_router"]
