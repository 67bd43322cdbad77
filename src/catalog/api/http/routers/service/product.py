"""Product API router: create with image upload, full replacement, read."""

from typing import Any

from fastapi import APIRouter, Depends
from loguru import logger
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse, PlainTextResponse

from src.catalog.api.http.deps import (
    get_config,
    get_image_storage,
    get_product_repository,
)
from src.catalog.core.services import S3ImageStorage
from src.catalog.entities.service.product import (
    ProductDocument,
    ProductRepository,
    UpdateOutcome,
    attach_image,
)
from src.catalog.runtime.config.config_data import ConfigData

router = APIRouter(tags=["products"])


class AddProductRequest(BaseModel):
    """Body of ``POST /add_product``."""

    product: ProductDocument
    file_path: str = Field(min_length=1, description="Local path of the image to upload")
    file_name: str = Field(min_length=1, description="Object key for the uploaded image")


class AddProductResponse(BaseModel):
    inserted_id: str
    image_url: str
    image_attached: bool


@router.get("/", response_class=PlainTextResponse)
async def index(config: ConfigData = Depends(get_config)) -> str:
    return config.app.welcome_message


@router.post("/add_product", response_model=AddProductResponse)
async def add_product(
    payload: AddProductRequest,
    repository: ProductRepository = Depends(get_product_repository),
    storage: S3ImageStorage = Depends(get_image_storage),
) -> AddProductResponse:
    """Upload the image, attach its URL to the product, then insert it."""
    image_url = await storage.upload(payload.file_path, payload.file_name)

    product = payload.product
    attachment = attach_image(product, image_url)
    if not attachment.attached:
        logger.warning(
            "Image {} not attached: product has no {}",
            image_url,
            attachment.missing_level,
        )

    inserted_id = await repository.create(product)
    return AddProductResponse(
        inserted_id=str(inserted_id),
        image_url=image_url,
        image_attached=attachment.attached,
    )


@router.put("/change_product/{product_id}", response_model=None)
async def change_product(
    product_id: str,
    product: ProductDocument,
    repository: ProductRepository = Depends(get_product_repository),
) -> dict[str, Any] | JSONResponse:
    """Replace the stored fields of a product with the submitted document."""
    outcome = await repository.update(product_id, product)
    if outcome is UpdateOutcome.NOT_FOUND:
        return JSONResponse(status_code=404, content={"error": "Product not found"})
    return {"status": "Product updated successfully"}


@router.get("/get_product/{product_id}", response_model=None)
async def get_product(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository),
) -> dict[str, Any] | JSONResponse:
    """Get a product by ID."""
    product = await repository.get(product_id)
    if product is None:
        return JSONResponse(status_code=404, content={"error": "Product not found"})
    return product.model_dump(mode="json", by_alias=True)
