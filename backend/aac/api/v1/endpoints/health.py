from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from aac.config import settings
from aac.core.schemas.volume import VolumeStatus
from aac.core.session import SessionContext  # noqa: TCH001
from aac.dependencies import get_session

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "things-aac-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check(session: SessionContext = Depends(get_session)):
    """Readiness check endpoint.

    Reports per-volume load status so failed loads are visible, not only logged.
    """
    volumes = session.loader.statuses(range(1, settings.volume_count + 1))
    problems = session.catalog.invariant_violations()
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready" if not problems else "degraded",
            "catalog_size": len(session.catalog),
            "volumes_loaded": sum(1 for v in volumes if v.status is VolumeStatus.LOADED),
            "volumes_failed": [v.volume for v in volumes if v.status is VolumeStatus.FAILED],
            "problems": problems,
            "api_prefix": settings.api_prefix,
        }
    )
