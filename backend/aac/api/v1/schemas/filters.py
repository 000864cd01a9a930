from __future__ import annotations

from aac.core.models.base import AppBaseModel
from aac.core.models.symbol import SortBy  # noqa: TCH001


class FilterUpdate(AppBaseModel):
    """Partial update of the session filters; unset fields are kept."""

    active_category: str | None = None
    active_tags: list[str] | None = None
    search_query: str | None = None
    sort_by: SortBy | None = None
