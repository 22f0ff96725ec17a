"""Data models module."""

from product_api.models.product import (
    PRODUCT_FIELDS,
    Product,
    ProductCreate,
    ProductPatch,
    validate_new_product,
    validate_product_patch,
)

__all__ = [
    "PRODUCT_FIELDS",
    "Product",
    "ProductCreate",
    "ProductPatch",
    "validate_new_product",
    "validate_product_patch",
]
