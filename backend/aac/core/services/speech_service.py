from __future__ import annotations

import asyncio
import re
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from aac.utils.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from openai import AsyncOpenAI

    from aac.core.schemas.phrase import SpeechRequest

logger = get_logger(__name__)

# OpenAI text-to-speech accepts speed in this range.
MIN_SPEED = 0.25
MAX_SPEED = 4.0

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


class SpeechService(ABC):
    """Speech collaborator: turns text into audio as a side effect."""

    @abstractmethod
    async def speak(self, request: SpeechRequest) -> None:  # pragma: no cover - interface only
        """Speak `request.text`; nothing is returned to the caller."""


class LoggingSpeechService(SpeechService):
    """Speech backend used when no synthesizer is configured."""

    async def speak(self, request: SpeechRequest) -> None:
        logger.info(
            "Speak %r (rate=%.2f, pitch=%.2f, voice=%s)",
            request.text, request.rate, request.pitch, request.voice,
        )


class OpenAISpeechService(SpeechService):
    """Synthesize speech with OpenAI and write the audio under `output_dir`.

    The rate maps onto the API's `speed`. The API has no pitch control, so pitch
    is ignored.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        output_dir: Path,
        *,
        model: str = "tts-1",
        voice: str = "alloy",
    ) -> None:
        self._client = client
        self._output_dir = output_dir
        self._model = model
        self._voice = voice

    async def speak(self, request: SpeechRequest) -> None:
        speed = min(MAX_SPEED, max(MIN_SPEED, request.rate))
        resp = await self._client.audio.speech.create(
            model=self._model,
            voice=self._voice,
            input=request.text,
            speed=speed,
        )
        path = self._output_path(request.text)
        audio = resp.content

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(audio)

        await asyncio.to_thread(_write)
        logger.debug("Wrote speech for %r to %s", request.text, path)

    def _output_path(self, text: str) -> Path:
        stem = _UNSAFE_CHARS.sub("-", text.strip().lower())[:40].strip("-") or "utterance"
        return self._output_dir / f"{time.time_ns()}-{stem}.mp3"
