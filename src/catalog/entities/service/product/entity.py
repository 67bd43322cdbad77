"""Entity: Product.

A product document is a fixed four-level tree
(type -> item -> brand -> item details). Item details carry a recursive
subtitle tree and the list of image URLs attached to the product.
"""

from __future__ import annotations

from pydantic import Field

from src.catalog.entities.core._base import Entity


class Subtitle(Entity):
    """A titled piece of detail text with optional nested subtitles.

    ``subtitle`` distinguishes ``None`` (no children given) from an empty
    list, and both are stored as given.
    """

    title: str
    titledetail: str
    subtitle: list[Subtitle] | None = None


class ProductItemDetails(Entity):
    """Leaf of the product tree, the node images are attached to."""

    product_name: str
    title: list[str] = Field(default_factory=list)
    subtitle: list[Subtitle] = Field(default_factory=list)
    description: str
    amount: float
    discount_amount: float
    quantity: int
    images: list[str] = Field(default_factory=list, description="Image URLs")


class ProductBrand(Entity):
    brand_name: str
    items: list[ProductItemDetails] = Field(default_factory=list)


class ProductItem(Entity):
    item_name: str
    brands: list[ProductBrand] = Field(default_factory=list)


class ProductType(Entity):
    type_name: str
    items: list[ProductItem] = Field(default_factory=list)


class ProductDocument(Entity):
    """Root of a stored product tree.

    Only the first entry of ``types`` is touched by image attachment; the
    rest are kept as submitted.
    """

    types: list[ProductType] = Field(default_factory=list, alias="type_")
