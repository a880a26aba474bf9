from datetime import timedelta
from types import SimpleNamespace

import pytest

from review_scheduler.priority import PriorityScorer

from conftest import NOW


def reviewed_item(priority=40, review_count=2, interval_days=7, days_ago=1):
    return SimpleNamespace(
        priority=priority,
        review_count=review_count,
        interval_days=interval_days,
        last_study_date=NOW - timedelta(days=days_ago),
    )


@pytest.mark.parametrize(
    "understanding, expected",
    [(1, 80), (2, 60), (3, 40), (4, 20), (5, 10)],
)
def test_initial_priority(understanding, expected):
    assert PriorityScorer.initial_priority(understanding) == expected


@pytest.mark.parametrize(
    "understanding, expected",
    [(1, 5), (2, 4), (3, 3), (4, 2), (5, 1)],
)
def test_estimate_difficulty(understanding, expected):
    assert PriorityScorer.estimate_difficulty(understanding) == expected


def test_overdue_beyond_one_and_a_half_intervals_adds_25():
    item = reviewed_item(priority=40, review_count=2, interval_days=7, days_ago=12)
    assert PriorityScorer.updated_priority(item, 3, NOW) == 65


def test_overdue_within_one_and_a_half_intervals_adds_15():
    item = reviewed_item(priority=40, review_count=2, interval_days=7, days_ago=9)
    assert PriorityScorer.updated_priority(item, 3, NOW) == 55


def test_review_exactly_on_interval_is_not_overdue():
    item = reviewed_item(priority=40, review_count=2, interval_days=7, days_ago=7)
    assert PriorityScorer.updated_priority(item, 3, NOW) == 40


def test_elapsed_days_are_floored():
    item = reviewed_item(interval_days=7, review_count=2)
    item.last_study_date = NOW - timedelta(days=7, hours=23)
    assert PriorityScorer.updated_priority(item, 3, NOW) == 40


@pytest.mark.parametrize(
    "understanding, review_count, expected",
    [
        (1, 0, 40 + 20 + 15),
        (2, 1, 40 + 20 + 10),
        (4, 0, 40 - 10 + 15),
        (5, 3, 40 - 10),
        (3, 1, 40 + 10),
    ],
)
def test_adjustments_are_additive(understanding, review_count, expected):
    item = reviewed_item(priority=40, review_count=review_count, days_ago=1)
    assert PriorityScorer.updated_priority(item, understanding, NOW) == expected


def test_clamps_only_after_all_adjustments():
    # 0 - 10 + 15 = 5; clamping after the first step would give 15
    item = reviewed_item(priority=0, review_count=0, days_ago=1)
    assert PriorityScorer.updated_priority(item, 5, NOW) == 5


def test_clamps_to_upper_bound():
    item = reviewed_item(priority=100, review_count=0, interval_days=1, days_ago=30)
    assert PriorityScorer.updated_priority(item, 1, NOW) == 100


def test_clamps_to_lower_bound():
    item = reviewed_item(priority=3, review_count=5, days_ago=0)
    assert PriorityScorer.updated_priority(item, 5, NOW) == 0


def test_priorities_always_within_bounds():
    for understanding in range(1, 6):
        assert 0 <= PriorityScorer.initial_priority(understanding) <= 100
        for priority in (0, 10, 50, 90, 100):
            for review_count in (0, 1, 2, 10):
                for interval_days in (1, 7, 120):
                    for days_ago in (0, 1, 5, 200):
                        item = reviewed_item(priority, review_count, interval_days, days_ago)
                        assert 0 <= PriorityScorer.updated_priority(item, understanding, NOW) <= 100
