"""
Deterministic tour ranking over rating facts.

Both views share one algorithm: group facts by tour, compute the mean score
and the number of reviews, then order by

1. average score, highest first,
2. review count, most reviewed first,
3. title, ascending and case-sensitive,
4. tour id, ascending (only distinguishes tours that share a title).

The per-customer view drops every tour the customer rated *before*
aggregating, so the limit is applied to the post-exclusion ranking.
"""
from __future__ import annotations

import pandas as pd

from .models import TourSummary

SUMMARY_COLUMNS = ["tour_id", "title", "average_score", "review_count"]

_SORT_BY = ["average_score", "review_count", "title", "tour_id"]
_SORT_ASCENDING = [False, False, True, True]


def aggregate(ratings: pd.DataFrame, tours: pd.DataFrame) -> pd.DataFrame:
    """Return one ranked row per rated tour with ``SUMMARY_COLUMNS``."""
    if ratings.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    grouped = (
        ratings.groupby("tour_id")["score"]
        .agg(average_score="mean", review_count="count")
        .reset_index()
    )
    # Facts for tours missing from the tour table have no title to show
    summary = grouped.merge(tours[["tour_id", "title"]], on="tour_id", how="inner")
    summary = summary.sort_values(by=_SORT_BY, ascending=_SORT_ASCENDING)
    return summary[SUMMARY_COLUMNS].reset_index(drop=True)


def _to_summaries(frame: pd.DataFrame, limit: int) -> list[TourSummary]:
    return [
        TourSummary(
            tour_id=int(row.tour_id),
            title=str(row.title),
            average_score=float(row.average_score),
            review_count=int(row.review_count),
        )
        for row in frame.head(limit).itertuples(index=False)
    ]


def rank_top(ratings: pd.DataFrame, tours: pd.DataFrame, limit: int) -> list[TourSummary]:
    """Top ``limit`` tours across all rating facts."""
    if limit <= 0:
        return []
    return _to_summaries(aggregate(ratings, tours), limit)


def rank_for_customer(
    ratings: pd.DataFrame,
    tours: pd.DataFrame,
    customer_id: int,
    limit: int,
) -> list[TourSummary]:
    """Top ``limit`` tours among those ``customer_id`` has not rated."""
    if limit <= 0:
        return []
    rated = ratings.loc[ratings["customer_id"] == customer_id, "tour_id"]
    remaining = ratings[~ratings["tour_id"].isin(rated)]
    return _to_summaries(aggregate(remaining, tours), limit)
