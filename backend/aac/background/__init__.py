from .speech import SpeechDispatcher, speak_in_background

__all__ = [
    "SpeechDispatcher",
    "speak_in_background",
]
