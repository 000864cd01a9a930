from __future__ import annotations

from typing import TYPE_CHECKING, Any

from aac.core.repositories.volume_cache import VolumeCache
from aac.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    from supabase import Client


class SupabaseVolumeCache(VolumeCache):
    """Supabase implementation of the VolumeCache.

    Assumes a table with a text primary key `key` and a jsonb column `value`.
    """

    def __init__(self, client: Client, table_name: str = "volume_cache") -> None:
        self._client: Client = client
        self._table_name = table_name

    async def put(self, key: str, value: dict[str, Any]) -> None:
        await self._run(
            lambda: self._client.table(self._table_name)
            .upsert({"key": key, "value": value}, on_conflict="key")
            .execute()
        )
        logger.debug("Cached %s in %s", key, self._table_name)

    @staticmethod
    async def _run(func: Callable[[], Any]) -> Any:
        import asyncio
        return await asyncio.to_thread(func)
