from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from aac.core.models.symbol import Symbol
from aac.core.repositories.volume_cache import NullVolumeCache, volume_cache_key
from aac.core.schemas.volume import (
    LoadOutcome,
    VolumeDocument,
    VolumeLoadResult,
    VolumeState,
    VolumeStatus,
)
from aac.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from aac.core.repositories.volume_cache import VolumeCache
    from aac.core.repositories.volume_source import VolumeSource
    from aac.core.services.catalog_index import CatalogIndex


logger = get_logger(__name__)

# Expected fetch and parse failures, logged without a traceback. Any other
# exception still fails the load; cancellation propagates.
LOAD_ERRORS = (httpx.HTTPError, OSError, ValueError, ValidationError)


class VolumeLoader:
    """Load volumes into a catalog exactly once.

    Concurrent calls for the same volume share one in-flight task; calls for
    different volumes proceed independently. A failed load changes nothing and
    may be retried.
    """

    def __init__(
        self,
        catalog: CatalogIndex,
        source: VolumeSource,
        cache: VolumeCache | None = None,
    ) -> None:
        self._catalog = catalog
        self._source = source
        self._cache = cache or NullVolumeCache()
        self._loaded: set[int] = set()
        self._in_flight: dict[int, asyncio.Task[VolumeLoadResult]] = {}
        self._errors: dict[int, str] = {}

    def is_loaded(self, volume_id: int) -> bool:
        return volume_id in self._loaded

    def status(self, volume_id: int) -> VolumeState:
        if volume_id in self._loaded:
            return VolumeState(volume=volume_id, status=VolumeStatus.LOADED)
        if volume_id in self._in_flight:
            return VolumeState(volume=volume_id, status=VolumeStatus.LOADING)
        if volume_id in self._errors:
            return VolumeState(
                volume=volume_id,
                status=VolumeStatus.FAILED,
                error=self._errors[volume_id],
            )
        return VolumeState(volume=volume_id, status=VolumeStatus.NOT_LOADED)

    def statuses(self, volume_ids: Iterable[int]) -> list[VolumeState]:
        return [self.status(v) for v in volume_ids]

    async def load(self, volume_id: int) -> VolumeLoadResult:
        """Fetch and merge `volume_id` unless it is already loaded."""
        if volume_id in self._loaded:
            return VolumeLoadResult(volume=volume_id, outcome=LoadOutcome.ALREADY_LOADED)

        task = self._in_flight.get(volume_id)
        if task is None:
            task = asyncio.create_task(self._load(volume_id))
            self._in_flight[volume_id] = task
            task.add_done_callback(lambda _t: self._in_flight.pop(volume_id, None))
        else:
            logger.debug("Volume %s already loading; joining in-flight load", volume_id)
        # Shielded so a cancelled caller does not abort the load for the others.
        return await asyncio.shield(task)

    async def load_many(self, volume_ids: Iterable[int]) -> list[VolumeLoadResult]:
        """Load volumes one after another, in the given order."""
        results: list[VolumeLoadResult] = []
        for volume_id in volume_ids:
            results.append(await self.load(volume_id))
        return results

    async def aclose(self) -> None:
        """Cancel loads still in flight and wait for them to finish."""
        tasks = list(self._in_flight.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Cancelled %d in-flight volume loads", len(tasks))
        self._in_flight.clear()

    async def _load(self, volume_id: int) -> VolumeLoadResult:
        try:
            raw = await self._source.fetch(volume_id)
            document = VolumeDocument.model_validate(raw)
            symbols = [
                Symbol(**item.model_dump(), volume=volume_id)
                for item in document.items
            ]
        except Exception as err:
            message = f"{type(err).__name__}: {err}"
            self._errors[volume_id] = message
            if isinstance(err, LOAD_ERRORS):
                logger.error("Failed to load volume %s: %s", volume_id, message)
            else:
                logger.exception("Unexpected error loading volume %s", volume_id)
            return VolumeLoadResult(volume=volume_id, outcome=LoadOutcome.FAILED, error=message)

        # Merge and mark loaded with no await in between.
        added, skipped = self._catalog.merge(symbols)
        self._loaded.add(volume_id)
        self._errors.pop(volume_id, None)
        logger.info(
            "Loaded volume %s: %d symbols added, %d duplicates dropped",
            volume_id, added, skipped,
        )

        await self._write_through(volume_id, raw)
        return VolumeLoadResult(
            volume=volume_id,
            outcome=LoadOutcome.LOADED,
            added=added,
            skipped=skipped,
        )

    async def _write_through(self, volume_id: int, raw: dict[str, Any]) -> None:
        try:
            await self._cache.put(volume_cache_key(volume_id), raw)
        except Exception as err:
            logger.warning("Failed to cache volume %s: %s", volume_id, err)
