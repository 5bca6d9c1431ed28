"""Claim Rules — quantity arithmetic for claiming units of a listing.

Invariants:
    - A claim asks for at least 1 unit and at most the listing's remaining quantity
    - A listing with 0 remaining units is exhausted (and gets hidden)
"""

from sharehub.core.errors import ClaimQuantityError, ItemValidationError


def check_claim_quantity(requested: int, available: int) -> int:
    """Validate a claim and return the listing's remaining quantity after it."""
    if requested < 1:
        raise ItemValidationError(
            "Claim quantity must be at least 1", "quantity",
        )
    if requested > available:
        raise ClaimQuantityError(requested, available)
    return available - requested


def is_exhausted(remaining: int) -> bool:
    return remaining <= 0
