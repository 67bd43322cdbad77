"""FastAPI application factory and setup.

Run with ``uvicorn --factory src.catalog.api.http.app:create_app`` or the
``catalog-api`` console script.
"""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.routers.health import router as health_router
from src.catalog.api.http.routers.service.product import router as product_router
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.errors import CatalogError
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.config.config_template import load_config

__all__ = ["create_app"]


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        return response


# --- Error rendering ---
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    logger.bind(
        status_code=exc.status_code,
        error_type=type(exc).__name__,
    ).warning("request.failed: {}", exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


def create_app(
    config: ConfigData | None = None,
    dependencies: ApplicationDependencies | None = None,
) -> FastAPI:
    """Build the API.

    Args:
        config: Loaded configuration. Read from ``config.yaml`` when omitted;
            a missing connection string or bucket name fails here.
        dependencies: Prebuilt services. When omitted they are created from
            ``config`` at startup and closed at shutdown.
    """
    if config is None:
        config = dependencies.config if dependencies else load_config()

    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = getattr(app.state, "app_dependencies", None) is None
        if owned:
            logger.info(
                "Starting up application in {} environment", config.app.environment
            )
            app.state.app_dependencies = ApplicationDependencies.from_config(config)
        try:
            yield
        finally:
            logger.info("Shutting down application")
            if owned:
                await app.state.app_dependencies.close()
                app.state.app_dependencies = None

    is_production = config.app.environment == "production"
    app = FastAPI(
        title="Product Catalog API",
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    app.state.app_dependencies = dependencies

    app.add_middleware(SecurityHeadersMiddleware)

    if is_production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )

    app.middleware("http")(log_requests)
    app.add_exception_handler(CatalogError, catalog_error_handler)

    app.include_router(health_router)
    app.include_router(product_router)

    return app
