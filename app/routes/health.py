"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.core.config import Settings
from app.deps import get_settings, get_storage
from app.schemas.api import ReadinessResponse
from app.storage.contracts import ObjectStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    """Liveness probe."""
    return {"status": "ok"}


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Readiness probe - checks the storage bucket."""
    checks = {}
    all_ok = True

    try:
        if await run_in_threadpool(storage.bucket_exists, settings.S3_BUCKET):
            checks["storage"] = "ok"
        else:
            checks["storage"] = f"bucket {settings.S3_BUCKET} missing"
            all_ok = False
    except Exception as e:
        logger.warning("Readiness storage check failed: %s", e)
        checks["storage"] = f"error: {e}"
        all_ok = False

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={"status": "ok" if all_ok else "degraded", "checks": checks},
    )
