from __future__ import annotations

from typing import TYPE_CHECKING

from aac.core.schemas.query import FilterState
from aac.core.services.catalog_index import CatalogIndex
from aac.core.services.phrase_service import PhraseComposer
from aac.core.services.query_service import QueryService
from aac.core.services.usage_service import UsageTracker
from aac.core.services.volume_loader import VolumeLoader
from aac.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from aac.core.models.symbol import Symbol
    from aac.core.repositories.volume_cache import VolumeCache
    from aac.core.repositories.volume_source import VolumeSource
    from aac.core.schemas.phrase import SpeechRequest

logger = get_logger(__name__)


class SessionContext:
    """All mutable state of one browsing session.

    Owned by the composition root (the FastAPI app). A fresh context, and
    every `reset()`, starts with an empty catalog, no loaded volumes, an empty
    phrase and history, zeroed usage counts and default filters. All mutation
    happens on the event loop thread, one handler at a time.
    """

    def __init__(
        self,
        source: VolumeSource,
        speak: Callable[[SpeechRequest], None],
        *,
        cache: VolumeCache | None = None,
        history_limit: int = 100,
        usage_log_limit: int = 1000,
    ) -> None:
        self._source = source
        self._cache = cache
        self._speak = speak
        self._history_limit = history_limit
        self._usage_log_limit = usage_log_limit
        self.reset()

    def reset(self) -> None:
        """Drop all session state and start over."""
        self.catalog = CatalogIndex()
        self.loader = VolumeLoader(self.catalog, self._source, self._cache)
        self.usage = UsageTracker(log_limit=self._usage_log_limit)
        self.query = QueryService(self.catalog, self.usage)
        self.phrase = PhraseComposer(self._speak, history_limit=self._history_limit)
        self.filters = FilterState()
        logger.debug("Session state reset")

    def select_symbol(self, symbol: Symbol) -> int:
        """Handle a symbol tap: add its title to the phrase and count the use."""
        self.phrase.add_word(symbol.title)
        return self.usage.record_use(symbol.title)

    def filtered_symbols(self) -> list[Symbol]:
        return self.query.search_with(self.filters)

    async def aclose(self) -> None:
        """Stop in-flight loads, then release the volume source."""
        await self.loader.aclose()
        await self._source.aclose()
