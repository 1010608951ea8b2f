"""API response models for gateway endpoints."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Identifier and retrieval path of a stored upload."""

    cid: str
    url: str


class ReadinessResponse(BaseModel):
    status: str
    checks: dict[str, str]
