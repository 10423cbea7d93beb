from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from taxonomy.config import settings
from taxonomy.dependencies import get_vocabulary_repository
from taxonomy.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/")
def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "taxonomy-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
def readiness_check():
    """Readiness check endpoint; probes the configured store."""
    store_status = "connected"
    try:
        get_vocabulary_repository().list()
    except Exception as e:
        logger.error("Store readiness probe failed: %s", e)
        store_status = f"error: {str(e)}"

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "storage_backend": settings.storage_backend,
            "store": store_status,
            "api_prefix": settings.api_prefix
        }
    )
