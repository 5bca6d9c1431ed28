"""Claim rules — quantity checks and exhaustion."""

import pytest

from sharehub.core.claim_rules import check_claim_quantity, is_exhausted
from sharehub.core.errors import ClaimQuantityError, ItemValidationError


def test_returns_remaining_units():
    assert check_claim_quantity(2, 5) == 3


def test_claiming_everything_leaves_zero():
    assert check_claim_quantity(4, 4) == 0
    assert is_exhausted(0)


def test_over_claim_raises_with_counts():
    with pytest.raises(ClaimQuantityError) as exc_info:
        check_claim_quantity(3, 1)
    assert exc_info.value.requested == 3
    assert exc_info.value.available == 1
    assert exc_info.value.http_status == 400


@pytest.mark.parametrize("requested", [0, -1])
def test_non_positive_claim_rejected(requested):
    with pytest.raises(ItemValidationError):
        check_claim_quantity(requested, 5)


def test_remaining_units_not_exhausted():
    assert not is_exhausted(1)
