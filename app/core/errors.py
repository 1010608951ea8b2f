"""Gateway error taxonomy and its HTTP rendering."""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base class for every failure a handler reports to a client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ClientInputError(GatewayError):
    """Malformed identifier or upload; rejected before any storage call."""

    status_code = status.HTTP_400_BAD_REQUEST


class PayloadTooLargeError(ClientInputError):
    status_code = 413


class NotFoundError(GatewayError):
    """A valid identifier with no stored object."""

    status_code = status.HTTP_404_NOT_FOUND


class UpstreamStorageError(GatewayError):
    """Any storage backend failure other than a missing object."""

    status_code = status.HTTP_502_BAD_GATEWAY


class InternalError(GatewayError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def gateway_exception_handler(request: Request, exc: GatewayError) -> PlainTextResponse:
    """Render a gateway error as a short plain-text body."""
    if exc.status_code >= 500:
        logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return PlainTextResponse(f"{exc.message}\n", status_code=exc.status_code)


__all__ = [
    "ClientInputError",
    "GatewayError",
    "InternalError",
    "NotFoundError",
    "PayloadTooLargeError",
    "UpstreamStorageError",
    "gateway_exception_handler",
]
