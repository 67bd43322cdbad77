"""Core services exports."""

from .database.mongo_service import MongoService
from .storage.s3_storage import S3ImageStorage

__all__ = [
    "MongoService",
    "S3ImageStorage",
]
