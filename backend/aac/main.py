from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.middleware.security import SecurityMiddleware
from .api.v1.router import api_router
from .background.speech import SpeechDispatcher
from .config import settings
from .dependencies import build_speech_service, create_session
from .utils.logging import get_logger, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from .core.session import SessionContext

logger = get_logger(__name__)


def _image_origin() -> str | None:
    if not settings.volume_base_url:
        return None
    parts = urlsplit(settings.volume_base_url)
    return f"{parts.scheme}://{parts.netloc}" if parts.netloc else None


def create_app(
    session: SessionContext | None = None,
    dispatcher: SpeechDispatcher | None = None,
) -> FastAPI:
    """Build the API.

    A session and dispatcher can be injected (tests do); otherwise they are
    built from settings when the app starts, and volumes 1..volume_count are
    loaded in the background if `preload_volumes` is set.
    """
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        speech = dispatcher or SpeechDispatcher(build_speech_service())
        app.state.dispatcher = speech
        app.state.session = session or create_session(speech)

        preload: asyncio.Task | None = None
        if session is None and settings.preload_volumes:
            volume_ids = range(1, settings.volume_count + 1)
            preload = asyncio.create_task(app.state.session.loader.load_many(volume_ids))
        try:
            yield
        finally:
            if preload is not None and not preload.done():
                preload.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await preload
            await speech.drain()
            await app.state.session.aclose()
            logger.info("Session closed")

    app = FastAPI(
        title="things-aac API",
        debug=settings.debug,
        version="0.1.0",
        root_path=settings.root_path or "",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Content-Language",
            "Content-Type",
            "X-Requested-With",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Proxy headers (X-Forwarded-*) when behind a reverse proxy
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    # Trusted hosts (configure in env for production)
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    # GZip compression; symbol listings are large
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(SecurityMiddleware, image_origin=_image_origin())

    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
