from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class TourSummary:
    """Aggregated rating statistics for one tour, as produced by the ranker."""

    tour_id: int
    title: str
    average_score: float
    review_count: int


class Recommendation(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    tour_id: int
    title: str
    average_score: float
    review_count: int

    @classmethod
    def from_summary(cls, summary: TourSummary) -> Recommendation:
        return cls(
            tour_id=summary.tour_id,
            title=summary.title,
            average_score=summary.average_score,
            review_count=summary.review_count,
        )
