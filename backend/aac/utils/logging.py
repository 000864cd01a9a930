from __future__ import annotations

import logging
import sys

from aac.config import settings

# Third-party loggers that are noisy at INFO: httpx logs every volume fetch,
# openai every speech request.
_QUIET_LOGGERS = ("httpx", "httpcore", "openai")


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for the service.

    `level` overrides `settings.log_level`; application loggers (`aac.*`) follow
    it, third-party clients stay at WARNING.
    """
    level_name = (level or settings.log_level).upper()
    resolved = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=resolved,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout
    )

    logging.getLogger("aac").setLevel(resolved)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info("Logging configured", extra={"level": level_name})


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
