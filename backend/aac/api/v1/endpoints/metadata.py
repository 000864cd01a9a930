from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from aac.core.models.symbol import GroupingMode, SortBy
from aac.core.schemas.taxonomy import CatalogTaxonomy, CategoryEntry, DuplicateReport
from aac.core.session import SessionContext  # noqa: TCH001
from aac.dependencies import get_session

router = APIRouter()


@router.get("/taxonomy", response_model=CatalogTaxonomy)
async def get_taxonomy(session: SessionContext = Depends(get_session)) -> CatalogTaxonomy:
    """Return the category and tag vocabularies of the loaded catalog."""
    return session.catalog.taxonomy()


@router.get("/categories", response_model=list[CategoryEntry])
async def list_categories(session: SessionContext = Depends(get_session)) -> list[CategoryEntry]:
    """Categories that currently hold symbols, each with a representative symbol."""
    return session.catalog.categories_with_symbols()


@router.get("/sort-options", response_model=list[str])
async def list_sort_options() -> list[str]:
    return [s.value for s in SortBy]


@router.get("/grouping-modes", response_model=list[str])
async def list_grouping_modes() -> list[str]:
    return [m.value for m in GroupingMode]


@router.get("/duplicates", response_model=DuplicateReport)
async def get_duplicates(
    limit: int = Query(default=20, ge=1, le=1000),
    session: SessionContext = Depends(get_session),
) -> DuplicateReport:
    """Slugs shared across volumes. They are distinct symbols, reported for curation."""
    return session.catalog.cross_volume_duplicates(limit=limit)
