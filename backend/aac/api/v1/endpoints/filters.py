from __future__ import annotations

from fastapi import APIRouter, Depends, status

from aac.api.v1.schemas.filters import FilterUpdate  # noqa: TCH001
from aac.core.schemas.query import FilterState
from aac.core.session import SessionContext  # noqa: TCH001
from aac.dependencies import get_session

router = APIRouter()


@router.get("/", response_model=FilterState)
async def get_filters(session: SessionContext = Depends(get_session)):
    return session.filters


@router.patch("/", response_model=FilterState)
async def update_filters(
    payload: FilterUpdate,
    session: SessionContext = Depends(get_session),
):
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    session.filters = FilterState.model_validate(
        {**session.filters.model_dump(), **changes}
    )
    return session.filters


@router.post("/tags/{tag}/toggle", response_model=FilterState)
async def toggle_tag(tag: str, session: SessionContext = Depends(get_session)):
    session.filters.toggle_tag(tag)
    return session.filters


@router.delete("/tags", response_model=FilterState, status_code=status.HTTP_200_OK)
async def clear_tags(session: SessionContext = Depends(get_session)):
    session.filters.clear_tags()
    return session.filters
