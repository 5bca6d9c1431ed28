"""Review Store — ratings users leave about each other.

Invariants:
    - rating is an integer within MIN_RATING..MAX_RATING
    - Only the review's author may edit or delete it
    - A user cannot review themselves
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sharehub.core.domain_types import ReviewId, UserId
from sharehub.core.errors import (
    ItemValidationError, NotAllowedError, ResourceNotFoundError,
)
from sharehub.core.reputation import MAX_RATING, MIN_RATING
from sharehub.models.review import Review
from sharehub.stores.unit_of_work import guarded_read, unit_of_work


def _check_rating(rating: int) -> None:
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ItemValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}", "rating",
        )


class SqlReviewStore:
    """Review persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(
        self, author_id: UserId, subject_id: UserId, rating: int,
        message: str | None = None,
    ) -> Review:
        if author_id == subject_id:
            raise NotAllowedError("Users cannot review themselves")
        _check_rating(rating)
        review = Review(
            author_id=author_id, subject_id=subject_id,
            rating=rating, message=message,
        )
        async with unit_of_work(self.db, "create review"):
            self.db.add(review)
        return review

    async def get_by_id(self, review_id: ReviewId) -> Review:
        async with guarded_read(self.db, "get review"):
            result = await self.db.execute(select(Review).where(Review.id == review_id))
        review = result.scalar_one_or_none()
        if review is None:
            raise ResourceNotFoundError("Review", str(review_id))
        return review

    async def get_by_subject(self, subject_id: UserId) -> list[Review]:
        async with guarded_read(self.db, "list reviews for subject"):
            result = await self.db.execute(
                select(Review).where(Review.subject_id == subject_id)
                .order_by(Review.created_at.desc()),
            )
        return list(result.scalars().all())

    async def list_all(self) -> list[Review]:
        async with guarded_read(self.db, "list reviews"):
            result = await self.db.execute(
                select(Review).order_by(Review.created_at.desc()),
            )
        return list(result.scalars().all())

    async def edit(
        self, review_id: ReviewId, author_id: UserId,
        rating: int | None = None, message: str | None = None,
    ) -> Review:
        review = await self._owned(review_id, author_id)
        if rating is not None:
            _check_rating(rating)
        async with unit_of_work(self.db, "edit review"):
            if rating is not None:
                review.rating = rating
            if message is not None:
                review.message = message
        return review

    async def delete(self, review_id: ReviewId, author_id: UserId) -> None:
        review = await self._owned(review_id, author_id)
        async with unit_of_work(self.db, "delete review"):
            await self.db.delete(review)

    async def _owned(self, review_id: ReviewId, author_id: UserId) -> Review:
        review = await self.get_by_id(review_id)
        if review.author_id != author_id:
            raise NotAllowedError("User is not the author of this review")
        return review
