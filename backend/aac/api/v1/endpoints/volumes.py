from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse

from aac.config import settings
from aac.core.schemas.volume import VolumeLoadResult, VolumeState
from aac.core.session import SessionContext  # noqa: TCH001
from aac.dependencies import get_session

router = APIRouter()


@router.get("/", response_model=list[VolumeState])
async def list_volumes(session: SessionContext = Depends(get_session)):
    """Load status of every configured volume."""
    return session.loader.statuses(range(1, settings.volume_count + 1))


@router.post(
    "/{volume_id}/load",
    response_model=VolumeLoadResult,
    responses={status.HTTP_502_BAD_GATEWAY: {"model": VolumeLoadResult}},
)
async def load_volume(
    volume_id: int = Path(ge=1),
    session: SessionContext = Depends(get_session),
):
    """Load one volume into the catalog. Loading it again is a no-op.

    A failed fetch leaves the catalog unchanged and answers 502 with the
    failure, so the client can retry.
    """
    result = await session.loader.load(volume_id)
    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=result.model_dump(mode="json"),
        )
    return result
