"""Review Routes — ratings between users and per-user averages."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from sharehub.api.dependencies import get_current_user, get_stores
from sharehub.core.domain_types import ReviewId, UserId
from sharehub.core.reputation import average_rating
from sharehub.schemas.reputation import ReviewCreate, ReviewResponse, ReviewUpdate
from sharehub.stores.registry import StoreRegistry

router = APIRouter(prefix="/api/v1/reviews", tags=["reviews"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def add_review(
    body: ReviewCreate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    return await stores.reviews.add(
        user, UserId(body.subject_id), body.rating, body.message,
    )


@router.get("", response_model=list[ReviewResponse])
async def list_reviews(
    subject_id: UUID | None = Query(None),
    stores: StoreRegistry = Depends(get_stores),
):
    if subject_id:
        return await stores.reviews.get_by_subject(UserId(subject_id))
    return await stores.reviews.list_all()


@router.get("/average")
async def get_average_rating(
    subject_id: UUID = Query(...), stores: StoreRegistry = Depends(get_stores),
):
    reviews = await stores.reviews.get_by_subject(UserId(subject_id))
    return {
        "subject_id": str(subject_id),
        "average": average_rating(r.rating for r in reviews),
        "count": len(reviews),
    }


@router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: UUID, stores: StoreRegistry = Depends(get_stores)):
    return await stores.reviews.get_by_id(ReviewId(review_id))


@router.patch("/{review_id}", response_model=ReviewResponse)
async def edit_review(
    review_id: UUID,
    body: ReviewUpdate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    return await stores.reviews.edit(
        ReviewId(review_id), user, body.rating, body.message,
    )


@router.delete("/{review_id}")
async def delete_review(
    review_id: UUID,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    await stores.reviews.delete(ReviewId(review_id), user)
    return {"msg": "Review deleted!"}
