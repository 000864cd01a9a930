from __future__ import annotations

from pydantic import Field, field_validator

from aac.core.models.base import AppBaseModel


class WordAdd(AppBaseModel):
    word: str = Field(min_length=1, max_length=200, description="Word to append")

    @field_validator("word")
    @classmethod
    def validate_word(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Word must not be blank")
        return stripped


class PhraseRead(AppBaseModel):
    words: list[str]
    text: str


class SpeakResult(AppBaseModel):
    spoken: bool
    text: str | None = None


class ClearResult(AppBaseModel):
    cleared: bool
    history_size: int


class SpeechSettingsUpdate(AppBaseModel):
    rate: float | None = Field(default=None, gt=0, le=10)
    pitch: float | None = Field(default=None, ge=0, le=2)
    voice: str | None = None
