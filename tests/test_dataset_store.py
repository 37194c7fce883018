"""
Tests for the in-memory dataset store.
"""
import pytest

from query_bridge.core.exceptions import MemoryBudgetExceeded
from query_bridge.core.models import TableDescriptor
from query_bridge.store import DatasetStore, collect_pages, estimate_size

from conftest import FakeFetcher


TABLES = [
    TableDescriptor(name="a", description="first"),
    TableDescriptor(name="b", description="second"),
    TableDescriptor(name="c", description="third"),
]


def make_fetch_all(data, fetched):
    async def fetch_all(table_name):
        fetched.append(table_name)
        return data[table_name]
    return fetch_all


class TestEstimateSize:

    def test_compact_json_bytes(self):
        assert estimate_size([{"a": 1}]) == len(b'[{"a":1}]')

    def test_counts_utf8_bytes(self):
        assert estimate_size([{"n": "é"}]) == len('[{"n":"é"}]'.encode("utf-8"))


class TestCollectPages:

    @pytest.mark.asyncio
    async def test_follows_continuation_tokens(self):
        records = [{"i": i} for i in range(5)]
        fetcher = FakeFetcher({"t": records}, page_size=2)

        result = await collect_pages(fetcher, "t")

        assert result == records
        assert fetcher.calls == [("t", None), ("t", 2), ("t", 4)]

    @pytest.mark.asyncio
    async def test_empty_table(self):
        fetcher = FakeFetcher({"t": []})
        assert await collect_pages(fetcher, "t") == []


class TestDatasetStoreLoad:

    @pytest.mark.asyncio
    async def test_loads_tables_in_order(self):
        data = {"a": [{"x": 1}], "b": [{"y": "s"}], "c": []}
        fetched = []
        progress = []
        store = DatasetStore()

        await store.load(TABLES, make_fetch_all(data, fetched), on_progress=progress.append)

        assert fetched == ["a", "b", "c"]
        assert progress == ["a", "b", "c"]
        assert store.table_names() == ["a", "b", "c"]
        assert store.records_of("a") == [{"x": 1}]
        assert store.schema_of("b") == {"y": "string"}
        assert store.schema_of("c") == {}
        assert store.all_table_descriptors() == TABLES
        assert store.all_schemas() == {"a": {"x": "number"}, "b": {"y": "string"}, "c": {}}

    @pytest.mark.asyncio
    async def test_async_progress_hook_is_awaited(self):
        seen = []

        async def on_progress(name):
            seen.append(name)

        store = DatasetStore()
        await store.load(TABLES[:1], make_fetch_all({"a": []}, []), on_progress=on_progress)
        assert seen == ["a"]

    @pytest.mark.asyncio
    async def test_budget_exceeded_stops_before_next_table(self):
        data = {
            "a": [{"v": "x" * 10}],
            "b": [{"v": "y" * 50}],
            "c": [{"v": "z"}],
        }
        size_a = estimate_size(data["a"])
        size_b = estimate_size(data["b"])
        budget = size_a + 10
        fetched = []
        store = DatasetStore()

        with pytest.raises(MemoryBudgetExceeded) as exc_info:
            await store.load(TABLES, make_fetch_all(data, fetched), memory_budget_bytes=budget)

        error = exc_info.value
        assert error.table_name == "b"
        assert error.current_total_bytes == size_a + size_b
        assert error.budget_bytes == budget
        assert "'b'" in str(error)
        assert fetched == ["a", "b"]
        assert store.schema_of("a") == {"v": "string"}
        assert store.schema_of("b") is None

    @pytest.mark.asyncio
    async def test_zero_budget_is_unbounded(self):
        data = {"a": [{"v": "x" * 1000}]}
        store = DatasetStore()
        await store.load(TABLES[:1], make_fetch_all(data, []), memory_budget_bytes=0)
        assert store.has_table("a")

    @pytest.mark.asyncio
    async def test_load_from_fetcher(self, fetcher, table_descriptors, students):
        store = DatasetStore()
        await store.load_from(table_descriptors, fetcher)
        assert store.records_of("students") == students
        assert len(store.records_of("people")) == 4

    @pytest.mark.asyncio
    async def test_reload_replaces_snapshot_and_total(self):
        first = {"a": [{"v": "x" * 40}], "b": [{"v": "y"}]}
        second = {"c": [{"v": "z"}]}
        store = DatasetStore()

        await store.load(TABLES[:2], make_fetch_all(first, []))
        budget = estimate_size(second["c"]) + 1
        await store.load(TABLES[2:], make_fetch_all(second, []), memory_budget_bytes=budget)

        assert store.total_bytes == estimate_size(second["c"])
        assert store.table_names() == ["c"]
        assert not store.has_table("a")

    def test_unknown_table_accessors(self):
        store = DatasetStore()
        assert store.records_of("missing") is None
        assert store.schema_of("missing") is None
        assert not store.has_table("missing")
        assert not store.has_table(None)
