from __future__ import annotations

import threading
from typing import Any

TOP_VIEW = "top"
CUSTOMER_VIEW = "cust"


def top_key(limit: int) -> str:
    return f"{TOP_VIEW}:{limit}"


def customer_key(customer_id: int, limit: int) -> str:
    return f"{CUSTOMER_VIEW}:{customer_id}:{limit}"


class ResultCache:
    """
    In-process memo of ranked results, keyed by view and parameters.

    Entries never expire; ``clear()`` is the only invalidation. Lookups and
    stores are single dict operations with no lock, and ``clear()`` swaps in
    a fresh dict, so a concurrent ``get`` sees either the old map or the
    empty one. The lock only guards the hit/miss counters.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}
        self._stats_lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        value = self._entries.get(key)
        with self._stats_lock:
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
        return value

    def put(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        self._entries = {}
        with self._stats_lock:
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> dict:
        with self._stats_lock:
            hits, misses = self._hits, self._misses
        total = hits + misses
        return {
            "size": len(self._entries),
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / total * 100, 1) if total > 0 else 0.0,
        }


_cache = ResultCache()


def get_result_cache() -> ResultCache:
    """Return the process-wide result cache."""
    return _cache
