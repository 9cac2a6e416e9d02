from __future__ import annotations

import logging
from collections.abc import Callable

from ..ratings.store import RatingStore, get_rating_store
from .cache import ResultCache, customer_key, get_result_cache, top_key
from .models import Recommendation, TourSummary

logger = logging.getLogger(__name__)


def _read_through(
    key: str,
    compute: Callable[[], list[TourSummary]],
    cache: ResultCache,
) -> list[Recommendation]:
    """
    Serve ``key`` from the cache, computing and storing it on a miss.

    A failing cache is treated as a miss: the result is still computed and
    returned, only slower. Errors from ``compute`` propagate.
    """
    try:
        cached = cache.get(key)
    except Exception:
        logger.warning("Cache lookup failed for %s, computing fresh", key, exc_info=True)
        cached = None

    if cached is not None:
        logger.debug("Cache hit for %s", key)
        return list(cached)

    logger.debug("Cache miss for %s", key)
    result = tuple(Recommendation.from_summary(s) for s in compute())

    try:
        cache.put(key, result)
    except Exception:
        logger.warning("Cache store failed for %s, returning uncached result", key, exc_info=True)

    return list(result)


def _resolve_store(store: RatingStore | None) -> RatingStore:
    return store if store is not None else get_rating_store()


def _resolve_cache(cache: ResultCache | None) -> ResultCache:
    return cache if cache is not None else get_result_cache()


def get_top_recommendations(
    limit: int,
    store: RatingStore | None = None,
    cache: ResultCache | None = None,
) -> list[Recommendation]:
    return _read_through(
        top_key(limit),
        lambda: _resolve_store(store).query_top_groups(limit),
        _resolve_cache(cache),
    )


def get_customer_recommendations(
    customer_id: int,
    limit: int,
    store: RatingStore | None = None,
    cache: ResultCache | None = None,
) -> list[Recommendation]:
    """Top tours for ``customer_id``, never including a tour they already rated."""
    return _read_through(
        customer_key(customer_id, limit),
        lambda: _resolve_store(store).query_top_groups_excluding_customer(customer_id, limit),
        _resolve_cache(cache),
    )


def clear_recommendation_cache(cache: ResultCache | None = None) -> None:
    _resolve_cache(cache).clear()
    logger.info("Recommendation cache cleared")
