"""Attach an uploaded image URL to the first item-details node of a product."""

from dataclasses import dataclass
from typing import TypeVar

from src.catalog.entities.service.product.entity import (
    ProductDocument,
    ProductItemDetails,
)

T = TypeVar("T")


@dataclass(frozen=True)
class AttachmentResult:
    """Outcome of ``attach_image``.

    ``missing_level`` names the first empty sequence on the path
    ``types[0].items[0].brands[0].items[0]`` when nothing was attached.
    """

    attached: bool
    missing_level: str | None = None


def _first(sequence: list[T]) -> T | None:
    return sequence[0] if sequence else None


def locate_first_item_details(
    document: ProductDocument,
) -> tuple[ProductItemDetails | None, str | None]:
    """Walk the first-element path down to the leaf item details.

    Returns the node and ``None``, or ``None`` and the name of the level that
    had no first element.
    """
    product_type = _first(document.types)
    if product_type is None:
        return None, "types"
    item = _first(product_type.items)
    if item is None:
        return None, "items"
    brand = _first(item.brands)
    if brand is None:
        return None, "brands"
    details = _first(brand.items)
    if details is None:
        return None, "item_details"
    return details, None


def attach_image(document: ProductDocument, image_reference: str) -> AttachmentResult:
    """Append ``image_reference`` to the first leaf's image list.

    Nothing is modified when any level of the path is empty. Repeated calls
    append duplicates.
    """
    details, missing_level = locate_first_item_details(document)
    if details is None:
        return AttachmentResult(attached=False, missing_level=missing_level)
    details.images.append(image_reference)
    return AttachmentResult(attached=True)
