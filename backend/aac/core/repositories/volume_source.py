from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

VOLUME_DOCUMENT_NAME = "meta.json"


def volume_document_path(volume_id: int) -> str:
    """Relative location of a volume document, shared by all sources."""
    return f"volume-{volume_id}/{VOLUME_DOCUMENT_NAME}"


class VolumeSource(ABC):
    """Abstract source of raw volume documents.

    Implementations perform I/O (network, disk) and therefore expose async
    methods. They return the decoded JSON document untouched; validation and
    merging belong to the loader.
    """

    @abstractmethod
    async def fetch(self, volume_id: int) -> dict[str, Any]:  # pragma: no cover - interface only
        """Return the decoded document for `volume_id` or raise on failure."""

    async def aclose(self) -> None:
        """Release held resources. Sources without any keep the default."""
        return None
