"""Product model and write-time validation."""

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from product_api.errors import FieldError, ProductValidationError

# Schema order, also the order validation errors are reported in
PRODUCT_FIELDS = ("name", "description")

_JSON_TYPE_NAMES = {
    dict: "Object",
    list: "Array",
    float: "number",
    int: "number",
}


@dataclass
class Product:
    """Product data model representing a stored product record."""

    id: str
    name: str
    description: str

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Product":
        """Build a Product from a stored document, dropping store metadata."""
        return cls(
            id=str(document["id"]),
            name=document["name"],
            description=document["description"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class _ProductFields(BaseModel):
    """Shared casting rules: numbers and booleans become text."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @field_validator("*", mode="before")
    @classmethod
    def _booleans_to_text(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return "true" if value else "false"
        return value


class ProductCreate(_ProductFields):
    """Payload accepted when creating a product."""

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)


class ProductPatch(_ProductFields):
    """Partial payload accepted when updating a product."""

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)


def _required_reason(field_name: str) -> str:
    return f"Path `{field_name}` is required."


def _cast_reason(field_name: str, value: Any) -> str:
    type_name = _JSON_TYPE_NAMES.get(type(value), type(value).__name__)
    return (
        f'Cast to string failed for value "{json.dumps(value, default=str)}" '
        f'(type {type_name}) at path "{field_name}"'
    )


def _collect_errors(exc: ValidationError) -> Dict[str, str]:
    reasons: Dict[str, str] = {}
    for error in exc.errors():
        field_name = str(error["loc"][0])
        if field_name in reasons:
            continue
        if error["type"] in ("missing", "string_too_short") or error.get("input") is None:
            reasons[field_name] = _required_reason(field_name)
        else:
            reasons[field_name] = _cast_reason(field_name, error["input"])
    return reasons


def _raise_in_schema_order(reasons: Dict[str, str]) -> None:
    errors = [FieldError(name, reasons[name]) for name in PRODUCT_FIELDS if name in reasons]
    raise ProductValidationError(errors)


def validate_new_product(data: Dict[str, Any]) -> Dict[str, str]:
    """Validate a create payload and return the cleaned fields.

    Both fields are required: absent, null and empty-string values fail.
    Numbers and booleans are coerced to text and unknown keys are dropped.

    Raises:
        ProductValidationError: If any field fails validation.
    """
    try:
        return ProductCreate.model_validate(data).model_dump()
    except ValidationError as exc:
        _raise_in_schema_order(_collect_errors(exc))


def validate_product_patch(data: Dict[str, Any]) -> Dict[str, str]:
    """Validate an update payload and return only the fields it sets.

    Raises:
        ProductValidationError: If a provided field fails validation.
    """
    try:
        patch = ProductPatch.model_validate(data)
    except ValidationError as exc:
        _raise_in_schema_order(_collect_errors(exc))

    reasons = {
        name: _required_reason(name)
        for name in patch.model_fields_set
        if getattr(patch, name) is None
    }
    if reasons:
        _raise_in_schema_order(reasons)

    return patch.model_dump(include=patch.model_fields_set)
