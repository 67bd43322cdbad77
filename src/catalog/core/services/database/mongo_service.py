"""MongoDB client service shared by all requests."""

from typing import Any

from loguru import logger
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from src.catalog.runtime.config.config_data import DatabaseConfig


class MongoService:
    """Owns the async Mongo client and hands out the products collection.

    The driver keeps its own connection pool and is safe to share across
    concurrent requests. Connecting is lazy; a malformed connection string
    fails here, at startup.
    """

    def __init__(self, config: DatabaseConfig, client: AsyncMongoClient | None = None):
        logger.info("Setting up MongoDB client for {}", config.sanitized_url)
        self._config = config
        self._client: AsyncMongoClient[dict[str, Any]] = client or AsyncMongoClient(
            config.url,
            appname=config.app_name,
            serverSelectionTimeoutMS=config.server_selection_timeout_ms,
        )

    @property
    def database(self) -> AsyncDatabase[dict[str, Any]]:
        return self._client[self._config.name]

    def get_collection(self) -> AsyncCollection[dict[str, Any]]:
        """Return the collection product documents are stored in."""
        return self.database[self._config.collection]

    async def health_check(self) -> bool:
        """Ping the server; ``False`` when it cannot be reached."""
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(
                "MongoDB health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    async def close(self) -> None:
        logger.info("Closing MongoDB client")
        await self._client.close()
