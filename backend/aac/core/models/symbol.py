from __future__ import annotations

from enum import Enum

from pydantic import Field

from .base import AppBaseModel

ALL_CATEGORY = "All"

# Known categories in display order. Symbols may still carry a category that is
# not listed here; `All` matches those too.
KNOWN_CATEGORIES: tuple[str, ...] = (
    "Everyday Life",
    "Animals",
    "Food & Drink",
    "Places & Structures",
    "Nature & Outdoors",
    "Vehicles & Transport",
    "Work & Industry",
    "Technology & Media",
    "Entertainment & Leisure",
    "Sports",
    "Fashion & Style",
    "Health & Wellness",
    "Fantasy & Imagination",
    "History & Culture",
    "Space & Science",
    "Countries",
    "Events",
    "Hobbies",
    "Professions",
)


class SortBy(str, Enum):
    """Ordering applied as the last stage of a symbol query."""

    ALPHABETICAL = "alphabetical"
    CATEGORY = "category"
    RECENT = "recent"
    FREQUENT = "frequent"


class GroupingMode(str, Enum):
    """Glossary grouping of an already filtered symbol list."""

    ALPHABETICAL = "alphabetical"
    CATEGORY = "category"
    TAGS = "tags"
    FREQUENCY = "frequency"


SymbolKey = tuple[int, str]


class Symbol(AppBaseModel):
    """One pictographic concept, identified by `(volume, slug)`.

    Immutable once built: the catalog hands out stored instances and derives
    its tag vocabulary from them.
    """

    title: str = Field(description="Display title, also the spoken word")
    file_name: str = Field(description="Original image file name")
    slug: str = Field(description="Identifier, unique within a volume only")
    category: str = Field(description="Single fixed classification")
    tags: tuple[str, ...] = Field(default=(), description="Free-form labels")
    volume: int = Field(ge=1, description="Volume the symbol was loaded from")
    added_on: str | None = None

    @property
    def key(self) -> SymbolKey:
        return (self.volume, self.slug)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Apple",
                    "file_name": "apple.png",
                    "slug": "apple",
                    "category": "Food & Drink",
                    "tags": ["fruit", "food"],
                    "volume": 1,
                    "added_on": "2024-03-01",
                }
            ]
        }
    }
