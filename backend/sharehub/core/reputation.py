"""Reputation — review averages and report thresholds."""

from collections.abc import Iterable

MIN_RATING = 1
MAX_RATING = 5


def average_rating(ratings: Iterable[int]) -> float:
    """Mean of the ratings, 0.0 when a subject has no reviews."""
    values = list(ratings)
    if not values:
        return 0.0
    return sum(values) / len(values)


def is_reported(report_count: int, threshold: int) -> bool:
    return report_count >= threshold
