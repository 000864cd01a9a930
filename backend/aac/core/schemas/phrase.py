from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import Field

from aac.core.models.base import AppBaseModel


class SpeechSettings(AppBaseModel):
    rate: float = Field(default=1.0, gt=0, le=10)
    pitch: float = Field(default=1.0, ge=0, le=2)
    voice: str = "en-US"


class SpeechRequest(AppBaseModel):
    """A single utterance handed to the speech collaborator."""

    text: str
    rate: float = 1.0
    pitch: float = 1.0
    voice: str = "en-US"


class UsageEvent(AppBaseModel):
    key: str
    sequence: int
    used_at: datetime
