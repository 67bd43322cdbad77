"""FastAPI dependencies resolving the shared application services."""

from fastapi import Request

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import S3ImageStorage
from src.catalog.entities.service.product import ProductRepository
from src.catalog.runtime.config.config_data import ConfigData


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_config(request: Request) -> ConfigData:
    return get_app_dependencies(request).config


def get_product_repository(request: Request) -> ProductRepository:
    return get_app_dependencies(request).product_repository


def get_image_storage(request: Request) -> S3ImageStorage:
    return get_app_dependencies(request).image_storage
