"""S3 image storage used to host product images."""

import mimetypes
from pathlib import Path
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger
from starlette.concurrency import run_in_threadpool

from src.catalog.core.errors import UploadError
from src.catalog.runtime.config.config_data import StorageConfig


class S3ImageStorage:
    """Upload local image files to the configured bucket.

    boto3 is synchronous, so every call runs in Starlette's threadpool and
    only the awaiting request is suspended. One attempt is made per upload.
    """

    def __init__(self, config: StorageConfig, client: Any | None = None):
        logger.info("Setting up S3 client for bucket {}", config.bucket_name)
        self._config = config
        self._client = client or boto3.client(
            "s3",
            region_name=config.region,
            endpoint_url=config.endpoint_url,
        )

    @property
    def bucket_name(self) -> str:
        return self._config.bucket_name

    async def upload(self, file_path: str, object_key: str) -> str:
        """Upload the file at ``file_path`` under ``object_key``.

        The whole file is read into memory first.

        Returns:
            The virtual-hosted-style URL of the uploaded object.

        Raises:
            UploadError: if the file cannot be read or S3 rejects the upload.
        """
        try:
            body = await run_in_threadpool(Path(file_path).read_bytes)
        except OSError as e:
            raise UploadError(f"Image upload failed: cannot read {file_path}: {e}") from e

        params: dict[str, Any] = {
            "Bucket": self.bucket_name,
            "Key": object_key,
            "Body": body,
        }
        content_type, _ = mimetypes.guess_type(object_key)
        if content_type:
            params["ContentType"] = content_type

        try:
            await run_in_threadpool(self._client.put_object, **params)
        except (BotoCoreError, ClientError) as e:
            raise UploadError(f"Image upload failed: {e}") from e

        url = self._config.object_url(object_key)
        logger.info("Uploaded {} bytes to {}", len(body), url)
        return url

    async def health_check(self) -> bool:
        """Check the bucket is reachable with the current credentials."""
        try:
            await run_in_threadpool(self._client.head_bucket, Bucket=self.bucket_name)
            return True
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "S3 health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False
