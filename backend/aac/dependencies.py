from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, status

from aac.config import settings
from aac.core.repositories.implementations.filesystem.volume_cache import FileVolumeCache
from aac.core.repositories.implementations.filesystem.volume_source import FileVolumeSource
from aac.core.repositories.implementations.http.volume_source import HttpVolumeSource
from aac.core.repositories.volume_cache import NullVolumeCache
from aac.core.services.speech_service import LoggingSpeechService, OpenAISpeechService
from aac.core.session import SessionContext
from aac.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from aac.background.speech import SpeechDispatcher
    from aac.core.models.symbol import Symbol
    from aac.core.repositories.volume_cache import VolumeCache
    from aac.core.repositories.volume_source import VolumeSource
    from aac.core.services.speech_service import SpeechService

DEFAULT_VOLUME_DIR = Path("public")


def build_volume_source() -> VolumeSource:
    """Pick the volume source from settings: HTTP if a base URL is set, else disk."""
    if settings.volume_base_url:
        logger.info("Loading volumes from %s", settings.volume_base_url)
        return HttpVolumeSource(settings.volume_base_url, timeout=settings.fetch_timeout)
    root = settings.volume_dir or DEFAULT_VOLUME_DIR
    logger.info("Loading volumes from directory %s", root)
    return FileVolumeSource(root)


def build_volume_cache() -> VolumeCache:
    if settings.cache_backend == "file":
        return FileVolumeCache(settings.cache_dir)
    if settings.cache_backend == "supabase":
        from aac.core.repositories.implementations.supabase.volume_cache import (
            SupabaseVolumeCache,
        )
        from aac.db.base import get_supabase_admin_client

        return SupabaseVolumeCache(get_supabase_admin_client(), settings.supabase_cache_table)
    return NullVolumeCache()


def build_speech_service() -> SpeechService:
    """OpenAI speech when an API key is configured, otherwise log utterances."""
    if not settings.openai_api_key:
        return LoggingSpeechService()
    from aac.utils.openai_client import get_openai_client

    return OpenAISpeechService(
        get_openai_client(),
        settings.speech_output_dir,
        model=settings.speech_model,
        voice=settings.speech_voice,
    )


def create_session(dispatcher: SpeechDispatcher) -> SessionContext:
    return SessionContext(
        build_volume_source(),
        dispatcher.submit,
        cache=build_volume_cache(),
        history_limit=settings.phrase_history_limit,
        usage_log_limit=settings.usage_log_limit,
    )


def get_session(request: Request) -> SessionContext:
    """Return the process-wide session owned by the app."""
    return request.app.state.session


def get_symbol(
    volume: int,
    slug: str,
    session: SessionContext = Depends(get_session),
) -> Symbol:
    symbol = session.catalog.get(volume, slug)
    if symbol is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Symbol not found",
        )
    return symbol
