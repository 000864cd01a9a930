"""
Shared pytest fixtures for the things-aac test suite.

Usage in tests:
    def test_something(session, volumes, run):
        volumes[1] = make_volume(make_item("Apple"))
        run(session.loader.load(1))
        assert len(session.catalog) == 1
"""

import asyncio

import pytest

from aac.core.session import SessionContext
from tests.factories import InMemoryVolumeSource, RecordingVolumeCache, SpeechRecorder


@pytest.fixture
def source():
    return InMemoryVolumeSource()


@pytest.fixture
def volumes(source):
    """The documents dict of the in-memory source, keyed by volume id."""
    return source.documents


@pytest.fixture
def cache():
    return RecordingVolumeCache()


@pytest.fixture
def spoken():
    return SpeechRecorder()


@pytest.fixture
def session(source, spoken, cache):
    """Session with small history and usage log limits."""
    return SessionContext(source, spoken, cache=cache, history_limit=5, usage_log_limit=50)


@pytest.fixture
def run():
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run
