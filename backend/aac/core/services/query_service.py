from __future__ import annotations

from typing import TYPE_CHECKING

from aac.core.models.symbol import ALL_CATEGORY, GroupingMode, SortBy
from aac.utils.collation import collation_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from aac.core.models.symbol import Symbol, SymbolKey
    from aac.core.schemas.query import FilterState
    from aac.core.services.catalog_index import CatalogIndex
    from aac.core.services.usage_service import UsageTracker

# Frequency buckets of the glossary view: (label, start, end) over usage rank.
FREQUENCY_BUCKETS: tuple[tuple[str, int, int | None], ...] = (
    ("Most Used", 0, 20),
    ("Frequently Used", 20, 50),
    ("Sometimes Used", 50, 100),
    ("All Others", 100, None),
)


def get_filtered_symbols(
    symbols: Iterable[Symbol],
    active_category: str = ALL_CATEGORY,
    active_tags: Iterable[str] = (),
    search_query: str = "",
    sort_by: SortBy | str = SortBy.ALPHABETICAL,
    usage_counts: Mapping[str, int] | None = None,
    last_used: Mapping[str, int] | None = None,
) -> list[Symbol]:
    """Filter and order symbols. Pure: inputs are never modified.

    Stages run in a fixed order: re-dedup by `(volume, slug)`, category,
    tags (any match), search (title or tag substring, case-insensitive),
    then sort. Usage maps are keyed by symbol title.
    """
    sort_by = SortBy(sort_by)

    seen: set[SymbolKey] = set()
    result: list[Symbol] = []
    for symbol in symbols:
        if symbol.key in seen:
            continue
        seen.add(symbol.key)
        result.append(symbol)

    if active_category != ALL_CATEGORY:
        result = [s for s in result if s.category == active_category]

    wanted_tags = set(active_tags)
    if wanted_tags:
        result = [s for s in result if wanted_tags.intersection(s.tags)]

    if search_query:
        query = search_query.lower()
        result = [
            s for s in result
            if query in s.title.lower() or any(query in t.lower() for t in s.tags)
        ]

    return sort_symbols(result, sort_by, usage_counts=usage_counts, last_used=last_used)


def sort_symbols(
    symbols: list[Symbol],
    sort_by: SortBy,
    *,
    usage_counts: Mapping[str, int] | None = None,
    last_used: Mapping[str, int] | None = None,
) -> list[Symbol]:
    if sort_by is SortBy.ALPHABETICAL:
        return sorted(symbols, key=lambda s: collation_key(s.title))
    if sort_by is SortBy.CATEGORY:
        return sorted(
            symbols,
            key=lambda s: (collation_key(s.category), collation_key(s.title)),
        )
    if sort_by is SortBy.FREQUENT:
        counts = usage_counts or {}
        return sorted(symbols, key=lambda s: -counts.get(s.title, 0))
    # RECENT: latest use first; never-used symbols keep their filtered order.
    order = last_used or {}
    return sorted(symbols, key=lambda s: -order.get(s.title, 0))


def group_symbols(
    symbols: Sequence[Symbol],
    mode: GroupingMode | str,
    usage_counts: Mapping[str, int] | None = None,
) -> dict[str, list[Symbol]]:
    """Group an already filtered list for the glossary; keys come back sorted."""
    mode = GroupingMode(mode)
    grouped: dict[str, list[Symbol]] = {}

    if mode is GroupingMode.ALPHABETICAL:
        for symbol in symbols:
            letter = symbol.title[:1].upper() or "#"
            grouped.setdefault(letter, []).append(symbol)
    elif mode is GroupingMode.CATEGORY:
        for symbol in symbols:
            grouped.setdefault(symbol.category or "Uncategorized", []).append(symbol)
    elif mode is GroupingMode.TAGS:
        for symbol in symbols:
            if not symbol.tags:
                grouped.setdefault("No Tags", []).append(symbol)
            for tag in symbol.tags:
                grouped.setdefault(tag, []).append(symbol)
    else:
        ranked = sort_symbols(list(symbols), SortBy.FREQUENT, usage_counts=usage_counts)
        for label, start, end in FREQUENCY_BUCKETS:
            grouped[label] = ranked[start:end]

    return {name: grouped[name] for name in sorted(grouped)}


class QueryService:
    """Run symbol queries against the session catalog.

    Remembers the last result and reuses it while neither the catalog, the
    usage counts nor the filter arguments have changed.
    """

    def __init__(self, catalog: CatalogIndex, usage: UsageTracker) -> None:
        self._catalog = catalog
        self._usage = usage
        self._memo_key: tuple | None = None
        self._memo_result: list[Symbol] = []

    def search(
        self,
        *,
        active_category: str = ALL_CATEGORY,
        active_tags: Iterable[str] = (),
        search_query: str = "",
        sort_by: SortBy | str = SortBy.ALPHABETICAL,
    ) -> list[Symbol]:
        sort_by = SortBy(sort_by)
        tags = tuple(active_tags)
        usage_sensitive = sort_by in (SortBy.FREQUENT, SortBy.RECENT)
        key = (
            self._catalog.revision,
            self._usage.revision if usage_sensitive else None,
            active_category,
            tags,
            search_query,
            sort_by,
        )
        if key == self._memo_key:
            return list(self._memo_result)

        result = get_filtered_symbols(
            self._catalog.symbols(),
            active_category=active_category,
            active_tags=tags,
            search_query=search_query,
            sort_by=sort_by,
            usage_counts=self._usage.counts() if usage_sensitive else None,
            last_used=self._usage.recency() if sort_by is SortBy.RECENT else None,
        )
        self._memo_key = key
        self._memo_result = result
        return list(result)

    def search_with(self, filters: FilterState) -> list[Symbol]:
        return self.search(
            active_category=filters.active_category,
            active_tags=filters.active_tags,
            search_query=filters.search_query,
            sort_by=filters.sort_by,
        )

    def group(self, symbols: Sequence[Symbol], mode: GroupingMode | str) -> dict[str, list[Symbol]]:
        return group_symbols(symbols, mode, usage_counts=self._usage.counts())
