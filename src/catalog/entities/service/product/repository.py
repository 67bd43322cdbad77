"""Persistence adapter for product documents."""

from enum import Enum
from typing import Any

from bson import ObjectId
from loguru import logger
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from src.catalog.core.errors import InvalidIdentifier, StorageError
from src.catalog.entities.service.product.entity import ProductDocument
from src.catalog.entities.service.product.serialization import (
    from_storage,
    to_storage,
)


class UpdateOutcome(str, Enum):
    UPDATED = "updated"
    NOT_FOUND = "not_found"


def parse_product_id(value: str) -> ObjectId:
    """Parse a caller supplied id into an ObjectId.

    Raises:
        InvalidIdentifier: if ``value`` is not a 24-character hex string.
    """
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdentifier(value)
    return ObjectId(value)


class ProductRepository:
    """Insert, replace and read product documents in a Mongo collection.

    Every operation makes a single attempt. Driver failures are raised as
    ``StorageError`` with the operation named in the message.
    """

    def __init__(self, collection: AsyncCollection[dict[str, Any]]):
        self._collection = collection

    async def create(self, document: ProductDocument) -> ObjectId:
        """Insert ``document`` and return the identifier the database assigned."""
        data = to_storage(document)
        data.pop("_id", None)
        try:
            result = await self._collection.insert_one(data)
        except PyMongoError as e:
            raise StorageError(f"Error inserting product: {e}") from e
        logger.info("Inserted product {}", result.inserted_id)
        return result.inserted_id

    async def update(self, product_id: str, document: ProductDocument) -> UpdateOutcome:
        """Overwrite the stored fields of ``product_id`` with ``document``.

        The id is validated before anything is serialized or sent.
        """
        oid = parse_product_id(product_id)
        data = to_storage(document)
        # _id is immutable once stored
        data.pop("_id", None)
        try:
            result = await self._collection.update_one({"_id": oid}, {"$set": data})
        except PyMongoError as e:
            raise StorageError(f"Error updating product: {e}") from e

        if result.matched_count > 0:
            logger.info("Updated product {}", oid)
            return UpdateOutcome.UPDATED
        logger.info("No product matched {}", oid)
        return UpdateOutcome.NOT_FOUND

    async def get(self, product_id: str) -> ProductDocument | None:
        """Read back a stored product, or ``None`` when no document matches."""
        oid = parse_product_id(product_id)
        try:
            raw = await self._collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise StorageError(f"Error reading product: {e}") from e
        if raw is None:
            return None
        return from_storage(raw)
