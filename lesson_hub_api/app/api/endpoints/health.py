"""
Service banner and health check.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from lesson_hub_api.app.core.config import settings
from lesson_hub_api.app.core.db import DocumentStore, get_store


router = APIRouter()


@router.get("/")
async def root() -> Dict[str, Any]:
    return {
        "message": settings.project_name,
        "version": settings.api_version,
        "docs": "/docs",
        "health": "/health",
    }


@router.get("/health")
async def health_check(store: DocumentStore = Depends(get_store)) -> JSONResponse:
    """Report whether the document store answers a ping.

    Returns 200 when it does and 503 otherwise.
    """
    database_ok = await store.ping()
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if database_ok else "degraded",
            "version": settings.api_version,
            "database": "connected" if database_ok else "unavailable",
        },
    )
