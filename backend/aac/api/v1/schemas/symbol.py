from __future__ import annotations

from typing import TYPE_CHECKING

from aac.core.models.base import AppBaseModel
from aac.utils.image_paths import (
    fallback_image_path,
    symbol_image_path,
    symbol_thumbnail_path,
)

if TYPE_CHECKING:
    from aac.core.models.symbol import Symbol


class SymbolRead(AppBaseModel):
    title: str
    file_name: str
    slug: str
    category: str
    tags: list[str]
    volume: int
    added_on: str | None
    image_path: str
    thumbnail_path: str
    fallback_path: str

    @classmethod
    def from_symbol(cls, symbol: Symbol) -> SymbolRead:
        return cls(
            **symbol.model_dump(),
            image_path=symbol_image_path(symbol),
            thumbnail_path=symbol_thumbnail_path(symbol),
            fallback_path=fallback_image_path(),
        )


class SymbolGroupRead(AppBaseModel):
    name: str
    count: int
    symbols: list[SymbolRead]


class SymbolSelectResult(AppBaseModel):
    """Outcome of tapping a symbol."""

    phrase: list[str]
    usage_count: int
