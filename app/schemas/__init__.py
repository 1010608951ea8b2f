"""API schemas."""

from app.schemas.api import ReadinessResponse, UploadResponse

__all__ = ["ReadinessResponse", "UploadResponse"]
