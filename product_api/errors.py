"""Typed failures raised by the product repository."""

from dataclasses import dataclass
from typing import List


class ProductError(Exception):
    """Base class for product store and validation failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class FieldError:
    """A single failed field check."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class ProductValidationError(ProductError):
    """Raised when a product payload fails write-time validation."""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        super().__init__(
            "Product validation failed: " + ", ".join(str(e) for e in self.errors)
        )


class ProductStoreError(ProductError):
    """Raised when the underlying store or its transport fails."""
    pass
