"""API routes package."""

from app.routes.gateway import router as gateway_router
from app.routes.health import router as health_router

__all__ = ["gateway_router", "health_router"]
