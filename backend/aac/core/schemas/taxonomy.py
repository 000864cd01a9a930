from __future__ import annotations

from pydantic import Field

from aac.core.models.base import AppBaseModel
from aac.core.models.symbol import Symbol  # noqa: TCH001


class CatalogTaxonomy(AppBaseModel):
    """Aggregated vocabularies of the loaded catalog.

    - categories: `All`, the known categories, then any other category present
    - tag_vocab: sorted union of every loaded symbol's tags
    """

    categories: list[str] = Field(default_factory=list)
    tag_vocab: list[str] = Field(default_factory=list)


class CategoryEntry(AppBaseModel):
    """A category that has symbols, with the first one as its thumbnail."""

    category: str
    representative: Symbol | None = None


class DuplicateSlug(AppBaseModel):
    slug: str
    volumes: list[int]


class DuplicateReport(AppBaseModel):
    """Slugs shared by more than one volume (kept apart, never merged)."""

    total_symbols: int
    total: int
    duplicates: list[DuplicateSlug] = Field(default_factory=list)
