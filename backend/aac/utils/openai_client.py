from __future__ import annotations

from functools import lru_cache

from openai import AsyncOpenAI

from aac.config import settings
from aac.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    """Return the process-wide OpenAI client used for speech synthesis.

    A tap should be heard right away, so requests get a short timeout and few
    retries. The key comes from `AAC_OPENAI_API_KEY` when set, otherwise from
    the environment's OPENAI_API_KEY.
    """
    options = {
        "timeout": settings.speech_timeout,
        "max_retries": settings.speech_max_retries,
    }
    if settings.openai_api_key:
        logger.debug("Creating speech client with AAC_OPENAI_API_KEY")
        return AsyncOpenAI(api_key=settings.openai_api_key, **options)
    logger.debug("Creating speech client with OPENAI_API_KEY from environment")
    return AsyncOpenAI(**options)
