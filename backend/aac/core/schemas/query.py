from __future__ import annotations

from pydantic import Field

from aac.core.models.base import AppBaseModel
from aac.core.models.symbol import ALL_CATEGORY, SortBy


class FilterState(AppBaseModel):
    """Browse filters of the current session."""

    active_category: str = ALL_CATEGORY
    active_tags: list[str] = Field(default_factory=list)
    search_query: str = ""
    sort_by: SortBy = SortBy.ALPHABETICAL

    def toggle_tag(self, tag: str) -> list[str]:
        """Add `tag` to the active tags, or remove it if already active."""
        if tag in self.active_tags:
            self.active_tags = [t for t in self.active_tags if t != tag]
        else:
            self.active_tags = [*self.active_tags, tag]
        return self.active_tags

    def clear_tags(self) -> None:
        self.active_tags = []
