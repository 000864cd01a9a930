from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from aac.api.v1.schemas.symbol import SymbolGroupRead, SymbolRead, SymbolSelectResult
from aac.core.models.symbol import GroupingMode, SortBy, Symbol  # noqa: TCH001
from aac.core.session import SessionContext  # noqa: TCH001
from aac.dependencies import get_session, get_symbol

router = APIRouter()


@router.get("/", response_model=list[SymbolRead])
async def list_symbols(
    category: str | None = None,
    tags: list[str] | None = Query(default=None),
    q: str | None = None,
    sort_by: SortBy | None = None,
    session: SessionContext = Depends(get_session),
):
    """Filtered, sorted symbols.

    Parameters left unset fall back to the session filters, so a client that
    keeps its filters on the server can call this without arguments.
    """
    filters = session.filters
    symbols = session.query.search(
        active_category=category if category is not None else filters.active_category,
        active_tags=tags if tags is not None else filters.active_tags,
        search_query=q if q is not None else filters.search_query,
        sort_by=sort_by or filters.sort_by,
    )
    return [SymbolRead.from_symbol(s) for s in symbols]


@router.get("/groups", response_model=list[SymbolGroupRead])
async def group_symbols(
    mode: GroupingMode = GroupingMode.ALPHABETICAL,
    session: SessionContext = Depends(get_session),
):
    """Session-filtered symbols grouped for the glossary view."""
    grouped = session.query.group(session.filtered_symbols(), mode)
    return [
        SymbolGroupRead(
            name=name,
            count=len(members),
            symbols=[SymbolRead.from_symbol(s) for s in members],
        )
        for name, members in grouped.items()
    ]


@router.post("/{volume}/{slug}/select", response_model=SymbolSelectResult)
async def select_symbol(
    symbol: Symbol = Depends(get_symbol),
    session: SessionContext = Depends(get_session),
):
    """Tap a symbol: speak and append its title, and count the use."""
    count = session.select_symbol(symbol)
    return SymbolSelectResult(phrase=session.phrase.current, usage_count=count)
