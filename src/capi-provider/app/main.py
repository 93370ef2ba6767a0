"""CAPI Catalog Provider FastAPI Application.

The service projects Cluster API clusters found on hub clusters into the
software catalog:
- One provider per configured hub cluster
- Periodic full refresh of each provider's entities
- Status and provider inspection endpoints
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import yaml
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from shared.config import CAPIProviderSettings, RootConfig, load_app_config
from shared.models import ErrorResponse, ProviderSchedule
from shared.observability import get_logger, setup_logging

from .api import health, providers, status
from .errors import ConfigurationError, NotInitializedError, ProviderError
from .services.catalog import CatalogBackend, HttpCatalog, InMemoryCatalog
from .services.provider import CAPIClusterProvider
from .services.scheduler import AsyncioTaskScheduler

settings = CAPIProviderSettings()
setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = get_logger(__name__)


def read_app_config(path: str) -> RootConfig:
    """Load the application config file.

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    try:
        return load_app_config(path)
    except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
        raise ConfigurationError(f"Failed to load application config {path}: {e}") from e


def create_catalog() -> CatalogBackend:
    if settings.catalog_url:
        return HttpCatalog(settings.catalog_url, timeout=settings.catalog_timeout_seconds)
    logger.warning("No catalog URL configured, keeping entities in memory")
    return InMemoryCatalog()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown of:
    - Provider construction from the application config
    - Catalog connections
    - Scheduled refresh tasks
    """
    logger.info("Starting CAPI catalog provider", version=settings.app_version)

    root_config = read_app_config(settings.config_file)

    scheduler = AsyncioTaskScheduler()
    schedule = None
    if settings.default_schedule is not None:
        schedule = scheduler.create_scheduled_task_runner(
            ProviderSchedule(**settings.default_schedule)
        )

    capi_providers = CAPIClusterProvider.from_config(
        root_config, schedule=schedule, scheduler=scheduler, log=logger
    )
    if not capi_providers:
        logger.warning("No CAPI providers configured")

    catalog = create_catalog()
    for provider in capi_providers:
        await provider.connect(catalog.connection_for(provider.get_provider_name()))

    app.state.scheduler = scheduler
    app.state.catalog = catalog
    app.state.providers = capi_providers

    logger.info("CAPI catalog provider started", provider_count=len(capi_providers))

    yield

    # Shutdown
    logger.info("Shutting down CAPI catalog provider")
    await scheduler.shutdown()
    await catalog.aclose()
    logger.info("CAPI catalog provider shutdown complete")


app = FastAPI(
    title="CAPI Catalog Provider",
    description="Projects Cluster API clusters from hub clusters into the software catalog",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    status_code = 503 if isinstance(exc, NotInitializedError) else 500
    body = ErrorResponse(error_code=type(exc).__name__, message=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


# Include routers
app.include_router(status.router, prefix="/api/v1", tags=["Status"])
app.include_router(providers.router, prefix="/api/v1", tags=["Providers"])
app.include_router(health.router, tags=["Health"])


@app.get("/")
async def root():
    """Root endpoint with service info."""
    return {
        "service": "capi-catalog-provider",
        "version": settings.app_version,
        "docs": "/docs",
    }
