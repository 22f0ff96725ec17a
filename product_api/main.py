"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_api.api import product_router, register_error_handlers
from product_api.config import AppConfig, get_config
from product_api.services import ProductRepository, create_product_repository

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    config: Optional[AppConfig] = None,
    repository: Optional[ProductRepository] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application configuration. Loaded from config.yaml and the
            environment when omitted.
        repository: Product repository to serve requests with. Built from
            the configured backend when omitted.
    """
    if config is None:
        config = get_config()
    if repository is None:
        repository = create_product_repository(config)

    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await repository.connect()
            logger.info(f"Product API started with '{repository.backend}' backend")
            yield
        finally:
            await repository.close()
            logger.info("Product API stopped")

    app = FastAPI(
        title="Product API",
        description="REST API for managing products",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.product_repository = repository

    # Last added middleware runs outermost, so error responses get CORS headers
    register_error_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(product_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
