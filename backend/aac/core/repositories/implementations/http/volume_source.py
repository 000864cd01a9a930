from __future__ import annotations

from typing import Any

import httpx

from aac.core.repositories.volume_source import VolumeSource, volume_document_path
from aac.utils.logging import get_logger

logger = get_logger(__name__)


class HttpVolumeSource(VolumeSource):
    """Fetch volume documents over HTTP.

    Documents live at `<base_url>/volume-<id>/meta.json`, the layout the image
    pipeline publishes. A client can be passed in for connection reuse or
    testing; otherwise one is created and owned by the source.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def url_for(self, volume_id: int) -> str:
        return f"{self._base_url}/{volume_document_path(volume_id)}"

    async def fetch(self, volume_id: int) -> dict[str, Any]:
        url = self.url_for(volume_id)
        logger.debug("Fetching volume %s from %s", volume_id, url)
        response = await self._client.get(url)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Volume {volume_id} document is not a JSON object")
        return data

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
