from __future__ import annotations

from fastapi import APIRouter, Depends, status

from aac.api.v1.schemas.phrase import (
    ClearResult,
    PhraseRead,
    SpeakResult,
    SpeechSettingsUpdate,
    WordAdd,
)
from aac.core.schemas.phrase import SpeechSettings
from aac.core.session import SessionContext  # noqa: TCH001
from aac.dependencies import get_session

router = APIRouter()


def _phrase_read(session: SessionContext) -> PhraseRead:
    return PhraseRead(words=session.phrase.current, text=session.phrase.text)


@router.get("/", response_model=PhraseRead)
async def get_phrase(session: SessionContext = Depends(get_session)):
    return _phrase_read(session)


@router.post("/words", response_model=PhraseRead, status_code=status.HTTP_201_CREATED)
async def add_word(payload: WordAdd, session: SessionContext = Depends(get_session)):
    """Append a word; the word is spoken in the background."""
    session.phrase.add_word(payload.word)
    return _phrase_read(session)


@router.post("/speak", response_model=SpeakResult)
async def speak_phrase(session: SessionContext = Depends(get_session)):
    text = session.phrase.speak_phrase()
    return SpeakResult(spoken=text is not None, text=text)


@router.post("/clear", response_model=ClearResult)
async def clear_phrase(session: SessionContext = Depends(get_session)):
    """Move the current phrase to history. Clearing an empty phrase does nothing."""
    cleared = session.phrase.clear()
    return ClearResult(cleared=cleared, history_size=len(session.phrase.history))


@router.get("/history", response_model=list[list[str]])
async def get_history(session: SessionContext = Depends(get_session)):
    return session.phrase.history


@router.get("/settings", response_model=SpeechSettings)
async def get_settings(session: SessionContext = Depends(get_session)):
    return session.phrase.settings


@router.patch("/settings", response_model=SpeechSettings)
async def update_settings(
    payload: SpeechSettingsUpdate,
    session: SessionContext = Depends(get_session),
):
    return session.phrase.update_settings(
        rate=payload.rate,
        pitch=payload.pitch,
        voice=payload.voice,
    )
