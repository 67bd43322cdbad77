from dataclasses import dataclass

from src.catalog.core.services import MongoService, S3ImageStorage
from src.catalog.entities.service.product import ProductRepository
from src.catalog.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: MongoService
    image_storage: S3ImageStorage
    product_repository: ProductRepository

    @classmethod
    def from_config(cls, config: ConfigData) -> "ApplicationDependencies":
        """Build the process-wide services from the loaded configuration."""
        database_service = MongoService(config.database)
        return cls(
            config=config,
            database_service=database_service,
            image_storage=S3ImageStorage(config.storage),
            product_repository=ProductRepository(database_service.get_collection()),
        )

    async def close(self) -> None:
        await self.database_service.close()
