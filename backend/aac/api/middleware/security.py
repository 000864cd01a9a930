from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from aac.config import settings
from aac.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import Request
    from starlette.types import ASGIApp

logger = get_logger(__name__)


class SecurityMiddleware(BaseHTTPMiddleware):
    """Add security headers and log session-mutating requests."""

    def __init__(self, app: ASGIApp, *, image_origin: str | None = None):
        super().__init__(app)
        self._image_origin = image_origin

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # Symbol images may be served from the volume host
        img_src = "img-src 'self' data:"
        if self._image_origin:
            img_src += f" {self._image_origin}"
        csp_policy = (
            "default-src 'self'; "
            "script-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            f"{img_src}; "
            "media-src 'self' blob:; "
            "frame-ancestors 'none';"
        )
        response.headers["Content-Security-Policy"] = csp_policy

        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=15552000; includeSubDomains"

        # Session state changes with every tap; never serve it from a cache.
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
        response.headers["Pragma"] = "no-cache"

        if request.method != "GET" and request.url.path.startswith(settings.api_prefix):
            logger.debug(
                "Session mutation",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "status": response.status_code,
                }
            )

        return response
