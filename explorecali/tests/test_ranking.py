from __future__ import annotations

import random

import pandas as pd

from explorecali.recommendations.ranking import aggregate, rank_for_customer, rank_top


def _frames(facts, titles):
    ratings = pd.DataFrame(facts, columns=["tour_id", "customer_id", "score"])
    tours = pd.DataFrame(list(titles.items()), columns=["tour_id", "title"])
    return ratings, tours


def _random_frames(seed: int, tours: int = 12, customers: int = 30):
    rng = random.Random(seed)
    facts = {
        (rng.randint(1, tours), rng.randint(1, customers)): rng.randint(1, 5)
        for _ in range(120)
    }
    # Duplicate titles on purpose so the tour id tie-break is exercised
    titles = {t: f"Tour {t % 5}" for t in range(1, tours + 1)}
    return _frames([(t, c, s) for (t, c), s in facts.items()], titles)


def test_top_orders_by_average_then_count():
    ratings, tours = _frames(
        [(1, 1, 5), (1, 2, 4), (2, 1, 5), (2, 3, 5)],
        {1: "T1", 2: "T2"},
    )

    result = rank_top(ratings, tours, 2)

    assert [(r.tour_id, r.average_score, r.review_count) for r in result] == [
        (2, 5.0, 2),
        (1, 4.5, 2),
    ]


def test_equal_average_and_count_falls_back_to_title():
    ratings, tours = _frames(
        [
            (1, 1, 5.0), (1, 2, 4.0), (1, 3, 4.5),
            (2, 1, 5.0), (2, 2, 4.0), (2, 3, 4.5),
        ],
        {1: "Beach", 2: "Alps"},
    )

    result = rank_top(ratings, tours, 10)

    assert [r.title for r in result] == ["Alps", "Beach"]


def test_title_tie_break_is_case_sensitive():
    ratings, tours = _frames([(1, 1, 4), (2, 1, 4)], {1: "alps", 2: "Beach"})

    result = rank_top(ratings, tours, 10)

    assert [r.title for r in result] == ["Beach", "alps"]


def test_more_reviews_win_on_equal_average():
    ratings, tours = _frames(
        [(1, 1, 4), (2, 1, 4), (2, 2, 4), (2, 3, 4)],
        {1: "Aaa", 2: "Zzz"},
    )

    result = rank_top(ratings, tours, 10)

    assert [r.tour_id for r in result] == [2, 1]


def test_customer_who_rated_everything_gets_nothing():
    ratings, tours = _frames(
        [(1, 1, 5), (2, 1, 3), (2, 2, 4), (3, 1, 2)],
        {1: "A", 2: "B", 3: "C"},
    )

    assert rank_for_customer(ratings, tours, 1, 10) == []


def test_zero_or_negative_limit_returns_empty():
    ratings, tours = _frames([(1, 1, 5)], {1: "A"})

    assert rank_top(ratings, tours, 0) == []
    assert rank_top(ratings, tours, -3) == []
    assert rank_for_customer(ratings, tours, 2, 0) == []


def test_no_ratings_returns_empty():
    ratings, tours = _frames([], {1: "A"})

    assert rank_top(ratings, tours, 5) == []
    assert aggregate(ratings, tours).empty


def test_ratings_for_unknown_tours_are_ignored():
    ratings, tours = _frames([(1, 1, 5), (99, 1, 5)], {1: "A"})

    assert [r.tour_id for r in rank_top(ratings, tours, 10)] == [1]


def test_exclusion_applies_before_limit():
    ratings, tours = _frames(
        [(1, 7, 5), (2, 8, 4), (3, 8, 3)],
        {1: "A", 2: "B", 3: "C"},
    )

    result = rank_for_customer(ratings, tours, 7, 1)

    assert [r.tour_id for r in result] == [2]


def test_exclusion_removes_every_review_of_rated_tour():
    ratings, tours = _frames(
        [(1, 7, 1), (1, 8, 5), (1, 9, 5), (2, 8, 2)],
        {1: "A", 2: "B"},
    )

    result = rank_for_customer(ratings, tours, 7, 10)

    assert [r.tour_id for r in result] == [2]


def test_customer_without_ratings_sees_top_list():
    ratings, tours = _random_frames(seed=3)

    assert rank_for_customer(ratings, tours, 10_000, 8) == rank_top(ratings, tours, 8)


def test_sort_contract_holds_for_every_adjacent_pair():
    ratings, tours = _random_frames(seed=11)

    result = rank_top(ratings, tours, 100)

    for a, b in zip(result, result[1:]):
        assert (-a.average_score, -a.review_count, a.title, a.tour_id) < (
            -b.average_score, -b.review_count, b.title, b.tour_id
        )


def test_limit_bound():
    ratings, tours = _random_frames(seed=5)
    rated_tours = ratings["tour_id"].nunique()

    for limit in (1, 3, rated_tours, rated_tours + 5):
        result = rank_top(ratings, tours, limit)
        assert len(result) == min(limit, rated_tours)


def test_exclusion_correctness():
    ratings, tours = _random_frames(seed=7)

    for customer_id in ratings["customer_id"].unique()[:10]:
        customer_id = int(customer_id)
        rated = set(ratings.loc[ratings["customer_id"] == customer_id, "tour_id"])
        result = rank_for_customer(ratings, tours, customer_id, 100)
        assert not rated & {r.tour_id for r in result}


def test_ranking_is_deterministic_under_row_order():
    ratings, tours = _random_frames(seed=13)
    shuffled = ratings.sample(frac=1.0, random_state=42).reset_index(drop=True)

    assert rank_top(ratings, tours, 50) == rank_top(shuffled, tours, 50)
    assert rank_top(ratings, tours, 50) == rank_top(ratings, tours, 50)
