"""Shared dependencies for FastAPI routes."""

from __future__ import annotations

from fastapi import Request

from app.core.config import Settings
from app.storage.contracts import ObjectStorage


def get_storage(request: Request) -> ObjectStorage:
    """Return the storage handle built once at startup."""
    return request.app.state.storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


__all__ = ["get_settings", "get_storage"]
