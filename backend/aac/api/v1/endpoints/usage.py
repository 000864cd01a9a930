from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from aac.api.v1.schemas.usage import UsageRead
from aac.core.session import SessionContext  # noqa: TCH001
from aac.dependencies import get_session

router = APIRouter()


@router.get("/", response_model=UsageRead)
async def get_usage(
    recent: int = Query(default=20, ge=0, le=1000),
    session: SessionContext = Depends(get_session),
):
    """Selection counts by symbol title, plus the latest usage events."""
    return UsageRead(
        counts=session.usage.counts(),
        recent=session.usage.recent_events(limit=recent),
    )
