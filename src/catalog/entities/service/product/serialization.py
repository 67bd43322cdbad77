"""Conversion between product documents and their BSON storage form."""

import math
from typing import Any

import bson
from bson.errors import BSONError
from pydantic import ValidationError

from src.catalog.core.errors import SerializationError
from src.catalog.entities.service.product.entity import ProductDocument

# MongoDB server limits for a single stored document.
MAX_NESTING_DEPTH = 100
MAX_BSON_SIZE = 16 * 1024 * 1024


def _check_value(value: Any, depth: int, path: str) -> None:
    """Reject non-finite floats and embedded documents/arrays past the depth limit."""
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"non-finite number {value!r} at {path}")
    if not isinstance(value, (dict, list)):
        return
    if depth > MAX_NESTING_DEPTH:
        raise ValueError(f"nesting depth exceeds {MAX_NESTING_DEPTH} levels at {path}")
    if isinstance(value, dict):
        for key, item in value.items():
            _check_value(item, depth + 1, f"{path}.{key}")
    else:
        for index, item in enumerate(value):
            _check_value(item, depth + 1, f"{path}[{index}]")


def to_storage(document: ProductDocument) -> dict[str, Any]:
    """Dump a document to the dict handed to the Mongo driver.

    Raises:
        SerializationError: if a number is non-finite, the tree is nested
            deeper than MongoDB allows, or the encoded document is too large.
    """
    data = document.model_dump(by_alias=True, mode="python")
    try:
        _check_value(data, 1, "$")
        encoded = bson.encode(data)
        if len(encoded) > MAX_BSON_SIZE:
            raise ValueError(
                f"document is {len(encoded)} bytes, above the {MAX_BSON_SIZE} byte limit"
            )
    except (ValueError, BSONError, OverflowError, TypeError) as e:
        raise SerializationError(f"Error converting to BSON: {e}") from e
    return data


def from_storage(raw: dict[str, Any]) -> ProductDocument:
    """Build a document from a raw stored mapping.

    Raises:
        SerializationError: if the stored mapping is not a product document.
    """
    try:
        return ProductDocument.model_validate(raw)
    except ValidationError as e:
        raise SerializationError(f"Error converting from BSON: {e}") from e
