"""
Tests for speech backends and background dispatch
"""

import asyncio
from types import SimpleNamespace

from aac.background.speech import SpeechDispatcher, speak_in_background
from aac.core.schemas.phrase import SpeechRequest
from aac.core.services.speech_service import (
    LoggingSpeechService,
    OpenAISpeechService,
    SpeechService,
)


class RecordingSpeechService(SpeechService):
    def __init__(self, fail=False):
        self.spoken = []
        self.fail = fail

    async def speak(self, request):
        await asyncio.sleep(0)
        if self.fail:
            raise RuntimeError("synthesizer offline")
        self.spoken.append(request.text)


class FakeSpeechAPI:
    """Stands in for `AsyncOpenAI().audio.speech`."""

    def __init__(self):
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(content=b"ID3-fake-audio")


def _request(text, rate=1.0):
    return SpeechRequest(text=text, rate=rate, pitch=1.0, voice="en-US")


class TestDispatcher:
    def test_submitted_requests_are_spoken(self, run):
        service = RecordingSpeechService()
        dispatcher = SpeechDispatcher(service)

        async def scenario():
            dispatcher.submit(_request("Apple"))
            dispatcher.submit(_request("Juice"))
            assert dispatcher.pending == 2
            await dispatcher.drain()

        run(scenario())

        assert service.spoken == ["Apple", "Juice"]
        assert dispatcher.pending == 0

    def test_failures_do_not_reach_the_caller(self, run):
        dispatcher = SpeechDispatcher(RecordingSpeechService(fail=True))

        async def scenario():
            dispatcher.submit(_request("Apple"))
            await dispatcher.drain()

        run(scenario())

        assert dispatcher.pending == 0

    def test_background_job_swallows_errors(self, run):
        assert run(speak_in_background(RecordingSpeechService(fail=True), _request("Hi"))) is None

    def test_submit_without_event_loop_drops_request(self):
        service = RecordingSpeechService()
        dispatcher = SpeechDispatcher(service)

        dispatcher.submit(_request("Apple"))

        assert dispatcher.pending == 0
        assert service.spoken == []


class TestBackends:
    def test_logging_service_logs_utterance(self, run, caplog):
        caplog.set_level("INFO", logger="aac.core.services.speech_service")

        run(LoggingSpeechService().speak(_request("Apple Juice")))

        assert "Apple Juice" in caplog.text

    def test_openai_service_writes_audio(self, tmp_path, run):
        api = FakeSpeechAPI()
        client = SimpleNamespace(audio=SimpleNamespace(speech=api))
        service = OpenAISpeechService(client, tmp_path, model="tts-1", voice="nova")

        run(service.speak(_request("Apple Juice!", rate=1.5)))

        assert api.calls == [
            {"model": "tts-1", "voice": "nova", "input": "Apple Juice!", "speed": 1.5}
        ]
        written = list(tmp_path.glob("*.mp3"))
        assert len(written) == 1
        assert written[0].name.endswith("-apple-juice.mp3")
        assert written[0].read_bytes() == b"ID3-fake-audio"

    def test_openai_speed_is_clamped(self, tmp_path, run):
        api = FakeSpeechAPI()
        client = SimpleNamespace(audio=SimpleNamespace(speech=api))
        service = OpenAISpeechService(client, tmp_path)

        run(service.speak(_request("Fast", rate=9.0)))
        run(service.speak(_request("Slow", rate=0.1)))

        assert [c["speed"] for c in api.calls] == [4.0, 0.25]
