from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aac.core.models.symbol import Symbol

IMAGE_EXTENSION = ".webp"
FULL_SIZE_DIR = "images-webp"
THUMBNAIL_DIR = "images-thumbs"
FALLBACK_IMAGE_PATH = "/vite.svg"

# Last extension only; dots inside directory names are not extensions.
_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def _webp_name(file_name: str) -> str:
    stem = _EXTENSION_RE.sub("", file_name)
    return f"{stem}{IMAGE_EXTENSION}"


def symbol_image_path(symbol: Symbol) -> str:
    """Full-size compressed image path for a symbol."""
    return f"/volume-{symbol.volume}/{FULL_SIZE_DIR}/{_webp_name(symbol.file_name)}"


def symbol_thumbnail_path(symbol: Symbol) -> str:
    """Thumbnail image path for a symbol."""
    return f"/volume-{symbol.volume}/{THUMBNAIL_DIR}/{_webp_name(symbol.file_name)}"


def fallback_image_path() -> str:
    return FALLBACK_IMAGE_PATH
