"""
Tests for volume loading

- Load once, no-op afterwards
- Dedup across repeated and reordered loads
- Failed loads leave state untouched and can be retried
- Concurrent loads of one volume share a single fetch
- Write-through cache is best effort
"""

import asyncio
import contextlib
import json
from types import SimpleNamespace

import httpx

from aac.core.repositories.implementations.filesystem.volume_cache import FileVolumeCache
from aac.core.repositories.implementations.filesystem.volume_source import FileVolumeSource
from aac.core.repositories.implementations.http.volume_source import HttpVolumeSource
from aac.core.repositories.implementations.supabase.volume_cache import SupabaseVolumeCache
from aac.core.schemas.volume import LoadOutcome, VolumeStatus
from aac.core.services.catalog_index import CatalogIndex
from aac.core.services.volume_loader import VolumeLoader
from tests.factories import (
    InMemoryVolumeSource,
    RecordingVolumeCache,
    make_item,
    make_volume,
)

APPLE = make_item("Apple", slug="apple", category="Food & Drink", tags=["fruit"])


def _catalog_entries(catalog):
    return {(s.volume, s.slug, s.title) for s in catalog.symbols()}


class TestLoad:
    """Basic load behaviour."""

    def test_items_are_tagged_with_volume(self, session, volumes, run):
        volumes[3] = make_volume(APPLE)

        result = run(session.loader.load(3))

        assert result.outcome is LoadOutcome.LOADED
        assert result.added == 1
        assert session.catalog.get(3, "apple").volume == 3

    def test_loading_twice_keeps_single_entry(self, session, volumes, source, run):
        """Loading volume 1 with Apple twice leaves the catalog at size 1."""
        volumes[1] = make_volume(APPLE)

        run(session.loader.load(1))
        second = run(session.loader.load(1))

        assert len(session.catalog) == 1
        assert second.outcome is LoadOutcome.ALREADY_LOADED
        assert source.fetches == [1]

    def test_duplicate_items_in_document_are_dropped(self, session, volumes, run):
        volumes[1] = make_volume(APPLE, make_item("Green Apple", slug="apple"))

        result = run(session.loader.load(1))

        assert (result.added, result.skipped) == (1, 1)
        assert session.catalog.get(1, "apple").title == "Apple"

    def test_tags_are_folded_into_vocabulary(self, session, volumes, run):
        volumes[1] = make_volume(APPLE, make_item("Bus", tags=["vehicle", "big"]))

        run(session.loader.load(1))

        assert session.catalog.tags() == ["big", "fruit", "vehicle"]

    def test_missing_tags_become_empty(self, session, volumes, run):
        item = make_item("Cloud")
        item["tags"] = None
        volumes[1] = make_volume(item)

        run(session.loader.load(1))

        assert session.catalog.get(1, "cloud").tags == ()

    def test_load_order_does_not_change_catalog(self, run):
        """Any load order yields the same set of entries."""
        documents = {
            1: make_volume(APPLE, make_item("Bat", slug="bat")),
            2: make_volume(make_item("Bat", slug="bat"), make_item("Cup")),
            3: make_volume(make_item("Dog", category="Animals")),
        }
        outcomes = []
        for order in ([1, 2, 3], [3, 2, 1], [2, 1, 3]):
            source = InMemoryVolumeSource()
            source.documents.update(documents)
            catalog = CatalogIndex()
            loader = VolumeLoader(catalog, source)
            run(loader.load_many(order))
            outcomes.append((_catalog_entries(catalog), catalog.tags()))

        assert outcomes[0] == outcomes[1] == outcomes[2]


class TestFailure:
    """Failed loads are observable and retryable."""

    def test_fetch_failure_leaves_state_unchanged(self, session, source, run):
        source.failures[1] = httpx.ConnectError("offline")

        result = run(session.loader.load(1))

        assert result.outcome is LoadOutcome.FAILED
        assert "ConnectError" in result.error
        assert len(session.catalog) == 0
        assert not session.loader.is_loaded(1)
        assert session.loader.status(1).status is VolumeStatus.FAILED

    def test_malformed_document_fails(self, session, volumes, run):
        volumes[1] = {"items": [{"title": "No slug"}]}

        result = run(session.loader.load(1))

        assert result.outcome is LoadOutcome.FAILED
        assert len(session.catalog) == 0
        assert session.catalog.tags() == []

    def test_retry_after_failure_succeeds(self, session, volumes, source, run):
        volumes[1] = make_volume(APPLE)
        source.failures[1] = OSError("disk")

        first = run(session.loader.load(1))
        second = run(session.loader.load(1))

        assert first.outcome is LoadOutcome.FAILED
        assert second.outcome is LoadOutcome.LOADED
        assert len(session.catalog) == 1
        assert session.loader.status(1).status is VolumeStatus.LOADED
        assert session.loader.status(1).error is None

    def test_unknown_volume_reports_not_loaded(self, session):
        assert session.loader.status(9).status is VolumeStatus.NOT_LOADED

    def test_unexpected_error_is_recorded_as_failure(self, session, volumes, source, run):
        """A closed HTTP client raises RuntimeError; it fails the load, not the caller."""
        volumes[1] = make_volume(APPLE)
        source.failures[1] = RuntimeError("Cannot send a request, as the client has been closed.")

        async def scenario():
            return await asyncio.gather(session.loader.load(1), session.loader.load(1))

        results = run(scenario())

        assert [r.outcome for r in results] == [LoadOutcome.FAILED, LoadOutcome.FAILED]
        assert "RuntimeError" in results[0].error
        assert session.loader.status(1).status is VolumeStatus.FAILED
        assert source.fetches == [1]
        assert len(session.catalog) == 0

        assert run(session.loader.load(1)).outcome is LoadOutcome.LOADED


class TestConcurrency:
    """In-flight guard for concurrent loads."""

    def test_concurrent_loads_of_same_volume_fetch_once(self, session, volumes, source, run):
        volumes[1] = make_volume(APPLE)

        async def scenario():
            source.gate = asyncio.Event()
            first = asyncio.create_task(session.loader.load(1))
            second = asyncio.create_task(session.loader.load(1))
            await asyncio.sleep(0)
            assert session.loader.status(1).status is VolumeStatus.LOADING
            source.gate.set()
            return await asyncio.gather(first, second)

        results = run(scenario())

        assert source.fetches == [1]
        assert len(session.catalog) == 1
        assert all(r.outcome is LoadOutcome.LOADED for r in results)

    def test_different_volumes_load_independently(self, session, volumes, source, run):
        volumes[1] = make_volume(APPLE)
        volumes[2] = make_volume(make_item("Dog", category="Animals"))

        async def scenario():
            return await asyncio.gather(session.loader.load(1), session.loader.load(2))

        results = run(scenario())

        assert sorted(source.fetches) == [1, 2]
        assert [r.outcome for r in results] == [LoadOutcome.LOADED, LoadOutcome.LOADED]
        assert len(session.catalog) == 2

    def test_close_cancels_in_flight_load_before_closing_source(self, session, volumes, source, run):
        """Shutdown with a cancelled preload leaves no load running on a closed source."""
        volumes[1] = make_volume(APPLE)

        async def scenario():
            source.gate = asyncio.Event()
            preload = asyncio.create_task(session.loader.load_many([1]))
            await asyncio.sleep(0)
            preload.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await preload

            await session.aclose()
            return [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]

        still_running = run(scenario())

        assert still_running == []
        assert source.closed
        assert len(session.catalog) == 0
        assert session.loader.status(1).status is VolumeStatus.NOT_LOADED


class TestCache:
    """Write-through of raw documents."""

    def test_successful_load_is_cached(self, session, volumes, cache, run):
        volumes[2] = make_volume(APPLE)

        run(session.loader.load(2))

        assert cache.entries == {"volume_2": volumes[2]}

    def test_failed_load_is_not_cached(self, session, cache, run):
        run(session.loader.load(2))

        assert cache.entries == {}

    def test_cache_failure_does_not_affect_load(self, volumes, source, run):
        volumes[1] = make_volume(APPLE)
        catalog = CatalogIndex()
        loader = VolumeLoader(catalog, source, RecordingVolumeCache(fail=True))

        result = run(loader.load(1))

        assert result.outcome is LoadOutcome.LOADED
        assert len(catalog) == 1

    def test_file_cache_writes_json(self, tmp_path, run):
        cache = FileVolumeCache(tmp_path / "cache")

        run(cache.put("volume_1", make_volume(APPLE)))

        stored = json.loads((tmp_path / "cache" / "volume_1.json").read_text(encoding="utf-8"))
        assert stored["items"][0]["slug"] == "apple"


class TestSources:
    """Concrete volume sources and cache backends."""

    def test_file_source_reads_meta_json(self, tmp_path, run):
        volume_dir = tmp_path / "volume-4"
        volume_dir.mkdir()
        (volume_dir / "meta.json").write_text(json.dumps(make_volume(APPLE)), encoding="utf-8")

        data = run(FileVolumeSource(tmp_path).fetch(4))

        assert data["items"][0]["title"] == "Apple"

    def test_file_source_missing_volume_fails_load(self, tmp_path, run):
        catalog = CatalogIndex()
        loader = VolumeLoader(catalog, FileVolumeSource(tmp_path))

        result = run(loader.load(1))

        assert result.outcome is LoadOutcome.FAILED
        assert "FileNotFoundError" in result.error

    def test_http_source_fetches_volume_document(self, run):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, json=make_volume(APPLE))

        async def scenario():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                source = HttpVolumeSource("https://cdn.example.org/aac/", client=client)
                return await source.fetch(5)

        data = run(scenario())

        assert requested == ["https://cdn.example.org/aac/volume-5/meta.json"]
        assert data["items"][0]["slug"] == "apple"

    def test_http_error_status_fails_load(self, run):
        async def scenario():
            transport = httpx.MockTransport(lambda request: httpx.Response(404))
            async with httpx.AsyncClient(transport=transport) as client:
                catalog = CatalogIndex()
                loader = VolumeLoader(catalog, HttpVolumeSource("https://cdn.test", client=client))
                return await loader.load(1), catalog

        result, catalog = run(scenario())

        assert result.outcome is LoadOutcome.FAILED
        assert "HTTPStatusError" in result.error
        assert len(catalog) == 0

    def test_supabase_cache_upserts_by_key(self, run):
        calls = []

        class FakeQuery:
            def __init__(self, table):
                self.table = table

            def upsert(self, row, on_conflict=None):
                calls.append((self.table, row, on_conflict))
                return self

            def execute(self):
                return SimpleNamespace(data=[])

        client = SimpleNamespace(table=FakeQuery)
        cache = SupabaseVolumeCache(client, table_name="aac_volumes")

        run(cache.put("volume_3", make_volume(APPLE)))

        assert calls == [
            ("aac_volumes", {"key": "volume_3", "value": make_volume(APPLE)}, "key"),
        ]
