"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import Settings, settings as default_settings
from app.core.errors import GatewayError, gateway_exception_handler
from app.core.logging import setup_logging
from app.routes import gateway_router, health_router
from app.storage.contracts import ObjectStorage, StorageError
from app.storage.factory import build_storage

logger = logging.getLogger(__name__)


def create_app(storage: ObjectStorage | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the gateway application.

    When ``storage`` is omitted the configured backend is built during
    startup; a bucket that cannot be checked or created aborts startup.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize resources on startup."""
        setup_logging(settings.LOG_LEVEL)

        if storage is None:
            try:
                app.state.storage = build_storage(settings)
            except StorageError as e:
                logger.critical("Failed to prepare bucket %r: %s", settings.S3_BUCKET, e)
                raise
        logger.info("Serving bucket %r via %s", settings.S3_BUCKET, type(app.state.storage).__name__)

        yield

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage

    app.add_exception_handler(GatewayError, gateway_exception_handler)

    # Register routers
    app.include_router(health_router)
    app.include_router(gateway_router)

    return app


app = create_app()
