"""IPFS-style retrieval and upload endpoints."""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse
from starlette.background import BackgroundTask
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from app.core.cid import CIDEncodingError, InvalidCIDError, compute_cid, parse_cid
from app.core.config import Settings
from app.core.errors import (
    ClientInputError,
    InternalError,
    NotFoundError,
    PayloadTooLargeError,
    UpstreamStorageError,
)
from app.deps import get_settings, get_storage
from app.schemas.api import UploadResponse
from app.storage.contracts import ObjectStorage, StorageError, StoredObject

logger = logging.getLogger(__name__)

router = APIRouter(tags=["gateway"])

BANNER = "seapin ipfs gateway\n"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
IMMUTABLE_CACHE_CONTROL = "public, max-age=29030400, immutable"


def _object_headers(obj: StoredObject, path: str) -> dict[str, str]:
    return {
        "Content-Type": obj.content_type or DEFAULT_CONTENT_TYPE,
        "Content-Length": str(obj.size),
        "Cache-Control": IMMUTABLE_CACHE_CONTROL,
        "X-Ipfs-Path": path,
    }


@router.get("/", response_class=PlainTextResponse)
def index():
    """Plain-text banner."""
    return BANNER


@router.api_route("/ipfs/{cid}", methods=["GET", "HEAD"])
async def get_ipfs(
    cid: str,
    request: Request,
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Serve the object stored under ``cid``."""
    try:
        content_id = parse_cid(cid)
    except InvalidCIDError as exc:
        logger.debug("Rejected identifier: %s", exc)
        raise ClientInputError("invalid CID") from exc

    key = str(content_id)
    try:
        obj = await run_in_threadpool(storage.get_object, settings.S3_BUCKET, key)
    except StorageError as exc:
        if exc.is_not_found:
            raise NotFoundError("not found") from exc
        logger.error("storage get error: %s", exc)
        raise UpstreamStorageError("storage error") from exc

    headers = _object_headers(obj, content_id.path)
    if request.method == "HEAD":
        obj.close()
        return Response(status_code=status.HTTP_200_OK, headers=headers)

    # A complete response closes the object in the background task; after a
    # client disconnect the task is skipped and iter_chunks closes it instead.
    return StreamingResponse(
        obj.iter_chunks(),
        status_code=status.HTTP_200_OK,
        headers=headers,
        background=BackgroundTask(obj.close),
    )


async def _read_upload(request: Request, max_bytes: int | None) -> tuple[bytes, str]:
    try:
        form = await request.form()
    except Exception as exc:
        raise ClientInputError("missing file field") from exc

    try:
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            raise ClientInputError("missing file field")
        try:
            data = await upload.read()
        except Exception as exc:
            raise ClientInputError("failed to read file") from exc
        if max_bytes is not None and len(data) > max_bytes:
            raise PayloadTooLargeError(f"file exceeds {max_bytes} bytes")
        return data, upload.content_type or DEFAULT_CONTENT_TYPE
    finally:
        await form.close()


@router.post("/upload", status_code=status.HTTP_201_CREATED, response_model=UploadResponse)
async def upload(
    request: Request,
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Store the ``file`` form field under its content identifier."""
    data, content_type = await _read_upload(request, settings.max_upload_bytes)

    try:
        content_id = compute_cid(data)
    except CIDEncodingError as exc:
        logger.exception("CID computation failed")
        raise InternalError("failed to compute CID") from exc

    key = str(content_id)
    try:
        await run_in_threadpool(
            storage.put_bytes, settings.S3_BUCKET, key, data, content_type=content_type
        )
    except StorageError as exc:
        logger.error("storage put error: %s", exc)
        raise UpstreamStorageError("storage error") from exc

    logger.info("Stored %s (%d bytes, %s)", key, len(data), content_type)
    body = UploadResponse(cid=key, url=content_id.path)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=body.model_dump())
