from __future__ import annotations

from typing import TYPE_CHECKING

from aac.core.models.symbol import ALL_CATEGORY, KNOWN_CATEGORIES, Symbol
from aac.core.schemas.taxonomy import (
    CatalogTaxonomy,
    CategoryEntry,
    DuplicateReport,
    DuplicateSlug,
)
from aac.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from aac.core.models.symbol import SymbolKey


logger = get_logger(__name__)


class CatalogIndex:
    """Deduplicated, append-only symbol catalog with derived vocabularies.

    Symbols are stored in insertion order and keyed by `(volume, slug)`. The
    first symbol seen for a key wins; later ones are dropped. The tag
    vocabulary is kept equal to the union of every stored symbol's tags and is
    re-sorted on each merge.
    """

    def __init__(self) -> None:
        self._symbols: list[Symbol] = []
        self._by_key: dict[SymbolKey, Symbol] = {}
        self._tags: list[str] = []
        self._revision = 0

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    @property
    def revision(self) -> int:
        """Incremented every time a merge adds at least one symbol."""
        return self._revision

    def merge(self, symbols: Iterable[Symbol]) -> tuple[int, int]:
        """Append the symbols whose key is new and fold in their tags.

        Returns `(added, skipped)`. Runs without suspension, so a merge is
        observed either entirely or not at all.
        """
        fresh: list[Symbol] = []
        fresh_keys: set[SymbolKey] = set()
        skipped = 0
        for symbol in symbols:
            key = symbol.key
            if key in self._by_key or key in fresh_keys:
                skipped += 1
                continue
            fresh_keys.add(key)
            fresh.append(symbol)

        if not fresh:
            return 0, skipped

        tag_set = set(self._tags)
        for symbol in fresh:
            tag_set.update(symbol.tags)
            self._by_key[symbol.key] = symbol
        self._symbols.extend(fresh)
        self._tags = sorted(tag_set)
        self._revision += 1
        logger.debug("Merged %d symbols (%d duplicates dropped)", len(fresh), skipped)
        return len(fresh), skipped

    def symbols(self) -> Sequence[Symbol]:
        return tuple(self._symbols)

    def get(self, volume: int, slug: str) -> Symbol | None:
        return self._by_key.get((volume, slug))

    def symbols_by_category(self, category: str) -> list[Symbol]:
        if category == ALL_CATEGORY:
            return list(self._symbols)
        return [s for s in self._symbols if s.category == category]

    def categories(self) -> list[str]:
        """`All`, the known categories, then other present categories sorted."""
        known = set(KNOWN_CATEGORIES)
        extra = sorted({s.category for s in self._symbols if s.category not in known})
        return [ALL_CATEGORY, *KNOWN_CATEGORIES, *extra]

    def tags(self) -> list[str]:
        return list(self._tags)

    def taxonomy(self) -> CatalogTaxonomy:
        return CatalogTaxonomy(categories=self.categories(), tag_vocab=self.tags())

    def categories_with_symbols(self) -> list[CategoryEntry]:
        """Categories that hold at least one symbol, each with its first symbol."""
        first_by_category: dict[str, Symbol] = {}
        for symbol in self._symbols:
            first_by_category.setdefault(symbol.category, symbol)

        entries = [CategoryEntry(category=ALL_CATEGORY)]
        for category in self.categories()[1:]:
            representative = first_by_category.get(category)
            if representative is not None:
                entries.append(CategoryEntry(category=category, representative=representative))
        return entries

    def cross_volume_duplicates(self, limit: int | None = 20) -> DuplicateReport:
        """Report slugs that occur in more than one volume."""
        volumes_by_slug: dict[str, list[int]] = {}
        for symbol in self._symbols:
            volumes_by_slug.setdefault(symbol.slug, []).append(symbol.volume)

        shared = [
            DuplicateSlug(slug=slug, volumes=volumes)
            for slug, volumes in volumes_by_slug.items()
            if len(volumes) > 1
        ]
        shown = shared if limit is None else shared[:limit]
        return DuplicateReport(
            total_symbols=len(self._symbols),
            total=len(shared),
            duplicates=shown,
        )

    def invariant_violations(self) -> list[str]:
        """Describe every way stored state breaks the catalog invariants."""
        problems: list[str] = []
        keys = [s.key for s in self._symbols]
        if len(keys) != len(set(keys)) or len(keys) != len(self._by_key):
            problems.append("duplicate (volume, slug) in catalog")
        expected_tags = sorted({t for s in self._symbols for t in s.tags})
        if expected_tags != self._tags:
            problems.append("tag vocabulary out of sync with catalog")
        return problems
