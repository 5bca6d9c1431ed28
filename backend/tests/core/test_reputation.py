"""Reputation — review averages and report threshold."""

from sharehub.core.reputation import average_rating, is_reported


def test_average_of_no_reviews_is_zero():
    assert average_rating([]) == 0.0


def test_average_accepts_generators():
    assert average_rating(r for r in (3, 4, 5)) == 4.0


def test_report_threshold_is_inclusive():
    assert is_reported(3, 3)
    assert not is_reported(2, 3)
