from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from ..config import DEFAULT_CONFIG
from ..recommendations.models import TourSummary
from ..recommendations.ranking import rank_for_customer, rank_top
from .models import RatingFact

logger = logging.getLogger(__name__)

TOUR_COLUMNS = ["tour_id", "title"]
RATING_COLUMNS = ["tour_id", "customer_id", "score"]


class RatingStoreError(Exception):
    """Raised when rating facts cannot be read or written."""


class UnknownTourError(RatingStoreError):
    """Raised when a rating refers to a tour the store does not know."""


def _require_columns(df: pd.DataFrame, columns: list[str], name: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise RatingStoreError(f"{name} data is missing columns: {', '.join(missing)}")


def _normalise_tours(df: pd.DataFrame) -> pd.DataFrame:
    _require_columns(df, TOUR_COLUMNS, "Tour")
    try:
        tours = df[TOUR_COLUMNS].astype({"tour_id": "int64"})
    except (TypeError, ValueError) as exc:
        raise RatingStoreError(f"Tour data has invalid values: {exc}") from exc
    tours = tours.assign(title=tours["title"].fillna("").astype(str))
    return tours.drop_duplicates("tour_id", keep="first").reset_index(drop=True)


def _normalise_ratings(df: pd.DataFrame) -> pd.DataFrame:
    _require_columns(df, RATING_COLUMNS, "Rating")
    try:
        ratings = df[RATING_COLUMNS].astype(
            {"tour_id": "int64", "customer_id": "int64", "score": "float64"}
        )
    except (TypeError, ValueError) as exc:
        raise RatingStoreError(f"Rating data has invalid values: {exc}") from exc
    # A customer's latest score for a tour replaces the earlier one
    return ratings.drop_duplicates(["tour_id", "customer_id"], keep="last").reset_index(drop=True)


class RatingStore:
    """
    Tours and rating facts held as DataFrames.

    Both tables are replaced wholesale under a lock and never modified in
    place, so a snapshot taken by a reader stays consistent while writers
    ingest new facts.
    """

    def __init__(self, tours: pd.DataFrame, ratings: pd.DataFrame | None = None) -> None:
        if ratings is None:
            ratings = pd.DataFrame(columns=RATING_COLUMNS)
        self._lock = threading.Lock()
        self._tours = _normalise_tours(tours)
        self._ratings = _normalise_ratings(ratings)

    @classmethod
    def from_csv(cls, tours_csv: Path, ratings_csv: Path) -> RatingStore:
        try:
            tours = pd.read_csv(tours_csv)
            ratings = pd.read_csv(ratings_csv)
        except (OSError, ValueError) as exc:
            raise RatingStoreError(f"Failed to load rating data: {exc}") from exc
        store = cls(tours, ratings)
        logger.info(
            "Loaded %d tours and %d ratings from %s",
            store.tour_count(),
            store.rating_count(),
            ratings_csv,
        )
        return store

    def snapshot(self) -> tuple[pd.DataFrame, pd.DataFrame]:
        """Return ``(ratings, tours)`` as seen at a single instant."""
        with self._lock:
            return self._ratings, self._tours

    def tour_count(self) -> int:
        return len(self._tours)

    def rating_count(self) -> int:
        return len(self._ratings)

    def add_ratings(self, facts: Iterable[RatingFact]) -> int:
        """
        Ingest rating facts and return how many were accepted.

        The batch is all-or-nothing: a single unknown tour id rejects it.
        Cached rankings are not invalidated here.
        """
        rows = pd.DataFrame(
            [(f.tour_id, f.customer_id, f.score) for f in facts],
            columns=RATING_COLUMNS,
        )
        if rows.empty:
            return 0
        incoming = _normalise_ratings(rows)

        with self._lock:
            unknown = set(incoming["tour_id"]) - set(self._tours["tour_id"])
            if unknown:
                ids = ", ".join(str(t) for t in sorted(int(t) for t in unknown))
                raise UnknownTourError(f"Unknown tour id(s): {ids}")
            if self._ratings.empty:
                combined = incoming
            else:
                combined = pd.concat([self._ratings, incoming], ignore_index=True)
            self._ratings = _normalise_ratings(combined)

        logger.info("Ingested %d rating(s)", len(rows))
        return len(rows)

    def query_top_groups(self, limit: int) -> list[TourSummary]:
        ratings, tours = self.snapshot()
        return rank_top(ratings, tours, limit)

    def query_top_groups_excluding_customer(self, customer_id: int, limit: int) -> list[TourSummary]:
        ratings, tours = self.snapshot()
        return rank_for_customer(ratings, tours, customer_id, limit)


_store: RatingStore | None = None
_store_lock = threading.Lock()


def get_rating_store() -> RatingStore:
    """Return the process-wide store, loading it from the configured CSVs on first call."""
    global _store
    with _store_lock:
        if _store is None:
            _store = RatingStore.from_csv(DEFAULT_CONFIG.tours_csv, DEFAULT_CONFIG.ratings_csv)
        return _store


def set_rating_store(store: RatingStore | None) -> None:
    global _store
    with _store_lock:
        _store = store
