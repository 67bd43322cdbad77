"""Entity package: Product."""

from .attachment import AttachmentResult, attach_image, locate_first_item_details
from .entity import (
    ProductBrand,
    ProductDocument,
    ProductItem,
    ProductItemDetails,
    ProductType,
    Subtitle,
)
from .repository import ProductRepository, UpdateOutcome, parse_product_id
from .serialization import from_storage, to_storage

__all__ = [
    "AttachmentResult",
    "ProductBrand",
    "ProductDocument",
    "ProductItem",
    "ProductItemDetails",
    "ProductRepository",
    "ProductType",
    "Subtitle",
    "UpdateOutcome",
    "attach_image",
    "from_storage",
    "locate_first_item_details",
    "parse_product_id",
    "to_storage",
]
