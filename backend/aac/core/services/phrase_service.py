from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from aac.core.schemas.phrase import SpeechRequest, SpeechSettings
from aac.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

logger = get_logger(__name__)


class PhraseComposer:
    """Ordered word buffer for the phrase being composed.

    Every mutation is synchronous. Speech goes through `speak`, a callable that
    must return immediately (see `SpeechDispatcher.submit`). Cleared phrases go
    to a history capped at `history_limit` entries, oldest dropped first.
    """

    def __init__(
        self,
        speak: Callable[[SpeechRequest], None],
        *,
        settings: SpeechSettings | None = None,
        history_limit: int = 100,
    ) -> None:
        self._speak = speak
        self._settings = settings or SpeechSettings()
        self._current: list[str] = []
        self._history: deque[list[str]] = deque(maxlen=max(1, history_limit))

    @property
    def current(self) -> list[str]:
        return list(self._current)

    @property
    def history(self) -> list[list[str]]:
        """Cleared phrases, oldest first."""
        return [list(p) for p in self._history]

    @property
    def settings(self) -> SpeechSettings:
        return self._settings

    @property
    def text(self) -> str:
        return " ".join(self._current)

    def add_word(self, word: str) -> None:
        """Append `word` and speak it on its own."""
        self._current.append(word)
        self._speak(self._request(word))

    def speak_phrase(self) -> str | None:
        """Speak the whole phrase; returns the spoken text, None when empty."""
        if not self._current:
            return None
        text = self.text
        self._speak(self._request(text))
        return text

    def clear(self) -> bool:
        """Archive and reset the current phrase. Returns False if it was empty."""
        if not self._current:
            return False
        if len(self._history) == self._history.maxlen:
            logger.debug("Phrase history full; dropping oldest entry")
        self._history.append(list(self._current))
        self._current = []
        return True

    def update_settings(
        self,
        *,
        rate: float | None = None,
        pitch: float | None = None,
        voice: str | None = None,
    ) -> SpeechSettings:
        """Apply a partial settings update; unset values are kept."""
        changes = {
            k: v for k, v in {"rate": rate, "pitch": pitch, "voice": voice}.items()
            if v is not None
        }
        self._settings = SpeechSettings.model_validate(
            {**self._settings.model_dump(), **changes}
        )
        return self._settings

    def _request(self, text: str) -> SpeechRequest:
        return SpeechRequest(
            text=text,
            rate=self._settings.rate,
            pitch=self._settings.pitch,
            voice=self._settings.voice,
        )
