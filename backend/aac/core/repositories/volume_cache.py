from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


def volume_cache_key(volume_id: int) -> str:
    return f"volume_{volume_id}"


class VolumeCache(ABC):
    """Write-through store for raw volume documents.

    Writes are opportunistic: callers log and ignore failures, so the catalog
    never depends on the cache being present or healthy.
    """

    @abstractmethod
    async def put(self, key: str, value: dict[str, Any]) -> None:  # pragma: no cover - interface only
        """Store `value` under `key`, replacing any previous value."""


class NullVolumeCache(VolumeCache):
    """Cache used when caching is disabled."""

    async def put(self, key: str, value: dict[str, Any]) -> None:
        return None
