from __future__ import annotations

from fastapi import FastAPI, Path, Query, Request, Response
from fastapi.responses import JSONResponse

from .config import DEFAULT_CONFIG
from .logging_config import configure_logging
from .ratings.models import RatingBatchRequest, RatingBatchResponse
from .ratings.store import RatingStoreError, UnknownTourError, get_rating_store
from .recommendations.cache import get_result_cache
from .recommendations.models import Recommendation
from .recommendations.service import (
    clear_recommendation_cache,
    get_customer_recommendations,
    get_top_recommendations,
)

logger = configure_logging(DEFAULT_CONFIG.log_level)

MAX_LIMIT = DEFAULT_CONFIG.max_limit

app = FastAPI(title="Tour Recommendation API", version="1.0.0")


# ── Error mapping ────────────────────────────────────────────────────────


@app.exception_handler(UnknownTourError)
async def unknown_tour_handler(request: Request, exc: UnknownTourError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(RatingStoreError)
async def rating_store_handler(request: Request, exc: RatingStoreError) -> JSONResponse:
    logger.error("Rating store failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Rating store unavailable"})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/recommendations/top/{limit}", response_model=list[Recommendation])
def top_recommendations(
    limit: int = Path(..., ge=1, le=MAX_LIMIT),
) -> list[Recommendation]:
    return get_top_recommendations(limit)


@app.get("/recommendations/customer/{customer_id}", response_model=list[Recommendation])
def customer_recommendations(
    customer_id: int = Path(..., ge=1),
    limit: int = Query(default=DEFAULT_CONFIG.default_customer_limit, ge=1, le=MAX_LIMIT),
) -> list[Recommendation]:
    return get_customer_recommendations(customer_id, limit)


@app.post("/ratings", response_model=RatingBatchResponse)
def ingest_ratings(body: RatingBatchRequest) -> RatingBatchResponse:
    # Cached rankings stay as they are until the cache is cleared
    accepted = get_rating_store().add_ratings(r.to_fact() for r in body.ratings)
    return RatingBatchResponse(status="recorded", accepted=accepted)


# ── Cache administration ─────────────────────────────────────────────────


@app.delete("/recommendations/cache", status_code=204, response_class=Response)
def clear_cache() -> Response:
    clear_recommendation_cache()
    return Response(status_code=204)


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_result_cache().stats()
