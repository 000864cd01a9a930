from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from aac.utils.logging import get_logger

if TYPE_CHECKING:
    from aac.core.schemas.phrase import SpeechRequest
    from aac.core.services.speech_service import SpeechService

logger = get_logger(__name__)


async def speak_in_background(service: SpeechService, request: SpeechRequest) -> None:
    """Background job to speak one utterance.

    Speech is a side effect nobody waits on, so errors are logged and
    swallowed.
    """
    try:
        await service.speak(request)
    except Exception as err:
        logger.error("Speech job failed for %r: %s", request.text, err)


class SpeechDispatcher:
    """Fire-and-forget submission of speech requests.

    `submit` returns immediately; the request runs as a task on the current
    event loop. References to pending tasks are kept so they are not garbage
    collected mid-flight, and `drain` waits for them (used on shutdown).
    """

    def __init__(self, service: SpeechService) -> None:
        self._service = service
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def submit(self, request: SpeechRequest) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; dropping speech for %r", request.text)
            return
        task = loop.create_task(speak_in_background(self._service, request))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
