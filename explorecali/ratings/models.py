from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class RatingFact:
    tour_id: int
    customer_id: int
    score: float


class RatingIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tour_id: int = Field(..., ge=1)
    customer_id: int = Field(..., ge=1)
    score: float = Field(..., ge=1, le=5)

    def to_fact(self) -> RatingFact:
        return RatingFact(tour_id=self.tour_id, customer_id=self.customer_id, score=self.score)


class RatingBatchRequest(BaseModel):
    ratings: list[RatingIn] = Field(..., min_length=1)


class RatingBatchResponse(BaseModel):
    status: str
    accepted: int
