from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any

from aac.core.repositories.volume_cache import VolumeCache

if TYPE_CHECKING:
    from pathlib import Path


class FileVolumeCache(VolumeCache):
    """Keep one JSON file per cache key under a directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def path_for(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    async def put(self, key: str, value: dict[str, Any]) -> None:
        path = self.path_for(key)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".json.tmp")
            tmp.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
            tmp.replace(path)

        await asyncio.to_thread(_write)
