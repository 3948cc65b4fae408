"""
Unit tests for the query result cache.
"""

import threading

import pytest

pytestmark = pytest.mark.unit

from docsearch.cache import QueryCache, cache_key
from docsearch.models import RankedResult, SearchQuery


def _result(doc_id, score=0.5):
    return RankedResult(id=doc_id, title=doc_id.title(), score=score)


class TestCacheKey:

    def test_filter_order_irrelevant(self):
        a = SearchQuery(query="vector", filters={"topic": "search", "lang": "en"})
        b = SearchQuery(query="vector", filters={"lang": "en", "topic": "search"})
        assert cache_key(a) == cache_key(b)

    @pytest.mark.parametrize("change", [
        {"query": "ranking"},
        {"limit": 3},
        {"min_score": 0.2},
        {"filters": {"topic": "search"}},
        {"fields": ["topic"]},
        {"include_content": False},
        {"include_highlights": False},
    ])
    def test_every_field_is_part_of_key(self, change):
        base = SearchQuery(query="vector")
        assert cache_key(base) != cache_key(base.model_copy(update=change))


class TestQueryCache:

    def test_miss_then_hit(self):
        cache = QueryCache()
        query = SearchQuery(query="vector")

        assert cache.get(query) is None
        cache.put(query, [_result("a")])

        assert cache.get(SearchQuery(query="vector")) == [_result("a")]
        assert cache.hits == 1
        assert cache.misses == 1

    def test_returned_list_is_a_copy(self):
        cache = QueryCache()
        query = SearchQuery(query="vector")
        cache.put(query, [_result("a")])

        cache.get(query).append(_result("b"))

        assert cache.get(query) == [_result("a")]

    def test_returned_results_are_copies(self):
        """Mutating a returned result leaves the cached entry intact"""
        cache = QueryCache()
        query = SearchQuery(query="vector")
        cache.put(query, [RankedResult(id="a", title="A", score=0.5, highlights=["x"])])

        first = cache.get(query)
        first[0].score = 0.0
        first[0].highlights.append("changed")

        second = cache.get(query)
        assert second[0].score == 0.5
        assert second[0].highlights == ["x"]

    def test_stored_results_are_copies(self):
        cache = QueryCache()
        query = SearchQuery(query="vector")
        results = [RankedResult(id="a", title="A", score=0.5, highlights=["x"])]
        cache.put(query, results)

        results[0].highlights.append("changed")

        assert cache.get(query)[0].highlights == ["x"]

    def test_lru_eviction(self):
        cache = QueryCache(max_entries=2)
        first, second, third = (SearchQuery(query=q) for q in ("one", "two", "three"))

        cache.put(first, [_result("1")])
        cache.put(second, [_result("2")])
        cache.get(first)  # first is now most recently used
        cache.put(third, [_result("3")])

        assert len(cache) == 2
        assert cache.get(second) is None
        assert cache.get(first) is not None
        assert cache.get(third) is not None

    def test_clear(self):
        cache = QueryCache()
        cache.put(SearchQuery(query="vector"), [_result("a")])

        cache.clear()

        assert len(cache) == 0

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            QueryCache(max_entries=size)

    def test_concurrent_puts(self):
        cache = QueryCache(max_entries=50)

        def worker(offset):
            for i in range(100):
                cache.put(SearchQuery(query=f"q{offset}-{i}"), [_result("a")])

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 50


class TestQueryCacheExpiry:

    class FakeClock:
        def __init__(self):
            self.now = 1000.0

        def __call__(self):
            return self.now

    def test_entry_expires_after_ttl(self):
        clock = self.FakeClock()
        cache = QueryCache(ttl_seconds=60, clock=clock)
        query = SearchQuery(query="vector")
        cache.put(query, [_result("a")])

        clock.now += 59
        assert cache.get(query) == [_result("a")]

        clock.now += 1
        assert cache.get(query) is None
        assert len(cache) == 0
        assert cache.misses == 1

    def test_put_refreshes_expiry(self):
        clock = self.FakeClock()
        cache = QueryCache(ttl_seconds=60, clock=clock)
        query = SearchQuery(query="vector")

        cache.put(query, [_result("a")])
        clock.now += 50
        cache.put(query, [_result("b")])
        clock.now += 50

        assert cache.get(query) == [_result("b")]

    def test_default_ttl_is_one_hour(self):
        assert QueryCache().ttl_seconds == 3600

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_invalid_ttl(self, ttl):
        with pytest.raises(ValueError):
            QueryCache(ttl_seconds=ttl)
