"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal
from urllib.parse import urlsplit, urlunsplit

from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(default=["GET", "POST", "PUT", "OPTIONS"])
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """MongoDB configuration model."""

    url: str = Field(min_length=1, description="MongoDB connection string")
    name: str = Field(default="test_db", description="Database name")
    collection: str = Field(
        default="products", description="Collection holding product documents"
    )
    server_selection_timeout_ms: int = Field(
        default=30000, description="Server selection timeout in milliseconds"
    )
    app_name: str = Field(
        default="product-catalog-api", description="Client name reported to MongoDB"
    )

    @computed_field
    @property
    def sanitized_url(self) -> str:
        """Connection string with any password masked, safe for logging."""
        parts = urlsplit(self.url)
        if parts.password is None:
            return self.url
        netloc = parts.netloc.replace(f":{parts.password}@", ":***@", 1)
        return urlunsplit(parts._replace(netloc=netloc))


class StorageConfig(BaseModel):
    """S3 object storage configuration model."""

    bucket_name: str = Field(min_length=1, description="Bucket receiving uploads")
    region: str | None = Field(default=None, description="AWS region of the bucket")
    endpoint_url: str | None = Field(
        default=None, description="Custom S3 endpoint (e.g. MinIO or LocalStack)"
    )

    def object_url(self, object_key: str) -> str:
        """Virtual-hosted-style URL of an object in the configured bucket."""
        return f"https://{self.bucket_name}.s3.amazonaws.com/{object_key}"


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="127.0.0.1", description="Application host")
    port: int = Field(default=8080, description="Application port")
    welcome_message: str = Field(
        default="Welcome to the Product Catalog API with AWS S3 Integration",
        description="Body returned by the index route",
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(description="MongoDB configuration")
    storage: StorageConfig = Field(description="Object storage configuration")
