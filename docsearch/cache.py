"""
Query result cache collaborator.

Consulted by the search service before ranking and populated after; the
ranking pipeline itself never caches. Keys are a deterministic JSON
serialization of the query, so equal queries share one entry regardless of
filter insertion order. Entries expire after one hour unless configured
otherwise.
"""

import json
import logging
import threading
import time
from collections import OrderedDict
from typing import Callable, List, Optional, Tuple

from .models import RankedResult, SearchQuery

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600


def cache_key(query: SearchQuery) -> str:
    """
    Deterministic cache key for a query.

    Example:
        >>> a = SearchQuery(query="q", filters={"a": "1", "b": "2"})
        >>> b = SearchQuery(query="q", filters={"b": "2", "a": "1"})
        >>> cache_key(a) == cache_key(b)
        True
    """
    return json.dumps(query.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))


class QueryCache:
    """
    Thread-safe LRU cache of ranked results keyed by query.

    Entries expire `ttl_seconds` after they were stored, so recency-decayed
    scores and deleted documents are not served indefinitely. Results are
    deep-copied on the way in and out; callers can't mutate entries.
    """

    def __init__(
        self,
        max_entries: int = 256,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got: {max_entries}")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got: {ttl_seconds}")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, List[RankedResult]]]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, query: SearchQuery) -> Optional[List[RankedResult]]:
        key = cache_key(query)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] <= self._clock():
                del self._entries[key]
                logger.debug(f"Expired cached query: {key[:80]}")
                entry = None
            if entry is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return _copy_results(entry[1])

    def put(self, query: SearchQuery, results: List[RankedResult]) -> None:
        key = cache_key(query)
        expires_at = self._clock() + self.ttl_seconds
        with self._lock:
            self._entries[key] = (expires_at, _copy_results(results))
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted cached query: {evicted[:80]}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("Query cache cleared")


def _copy_results(results: List[RankedResult]) -> List[RankedResult]:
    return [result.model_copy(deep=True) for result in results]
