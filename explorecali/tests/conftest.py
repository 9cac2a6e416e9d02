from __future__ import annotations

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from explorecali.app import app
from explorecali.ratings.store import RatingStore, set_rating_store
from explorecali.recommendations.cache import get_result_cache

TOURS = pd.DataFrame(
    [
        (1, "Big Sur Retreat"),
        (2, "Channel Islands Excursion"),
        (3, "Monterey Highlights"),
        (4, "Avila Beach Hot Springs"),
        (5, "Kids L.A."),
    ],
    columns=["tour_id", "title"],
)

# Expected top ranking:
#   2 Channel Islands Excursion  5.0 x2
#   3 Monterey Highlights        4.5 x4
#   1 Big Sur Retreat            4.5 x2
#   4 Avila Beach Hot Springs    3.0 x1
# Tour 5 has no ratings.
RATINGS = pd.DataFrame(
    [
        (1, 100, 5),
        (1, 101, 4),
        (2, 100, 5),
        (2, 102, 5),
        (3, 101, 5),
        (3, 102, 4),
        (3, 103, 5),
        (3, 104, 4),
        (4, 103, 3),
    ],
    columns=["tour_id", "customer_id", "score"],
)


@pytest.fixture
def store() -> RatingStore:
    return RatingStore(TOURS.copy(), RATINGS.copy())


@pytest.fixture
def client(store):
    set_rating_store(store)
    get_result_cache().clear()
    yield TestClient(app)
    set_rating_store(None)
    get_result_cache().clear()
