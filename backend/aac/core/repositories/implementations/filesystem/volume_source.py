from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any

from aac.core.repositories.volume_source import VolumeSource, volume_document_path

if TYPE_CHECKING:
    from pathlib import Path


class FileVolumeSource(VolumeSource):
    """Read volume documents from a local tree of `volume-<id>/meta.json` files."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def path_for(self, volume_id: int) -> Path:
        return self._root / volume_document_path(volume_id)

    async def fetch(self, volume_id: int) -> dict[str, Any]:
        path = self.path_for(volume_id)

        def _read() -> Any:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)

        data = await asyncio.to_thread(_read)
        if not isinstance(data, dict):
            raise ValueError(f"Volume {volume_id} document is not a JSON object")
        return data
