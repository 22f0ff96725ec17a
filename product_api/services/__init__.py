"""Service layer."""

from product_api.services.product_repository import (
    CosmosProductRepository,
    ProductRepository,
    SqliteProductRepository,
    create_product_repository,
)

__all__ = [
    "CosmosProductRepository",
    "ProductRepository",
    "SqliteProductRepository",
    "create_product_repository",
]
