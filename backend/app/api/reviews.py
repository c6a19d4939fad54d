"""Recipe reviews. Every change recomputes the recipe's average_rating and review_count."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from app.api.deps import current_user_id, current_user_name, optional_user_id
from app.schemas.review import ReviewCreate, ReviewCreated, ReviewList, ReviewRead, ReviewUpdate
from app.services.reviews import clean_comment, validate_review
from app.storage.db import get_session
from app.storage.models import Recipe, Review
from app.storage.repositories import (
    create_review,
    delete_review,
    get_recipe,
    get_review,
    get_reviews,
    get_user_review,
    update_review,
)

router = APIRouter(prefix="/recipes/{recipe_id}/reviews")


def _recipe_or_404(session: Session, recipe_id: int) -> Recipe:
    recipe = get_recipe(session, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


def _to_read(review: Review, user_id: str | None) -> ReviewRead:
    return ReviewRead(
        id=review.id,
        user_id=review.user_id,
        username=review.username,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
        updated_at=review.updated_at,
        is_owner=user_id is not None and review.user_id == user_id,
    )


def _owned_review_or_error(session: Session, recipe_id: int, review_id: int | None, user_id: str) -> Review:
    if review_id is None:
        raise HTTPException(status_code=400, detail="Review ID is required")
    review = get_review(session, recipe_id, review_id)
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    if review.user_id != user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return review


@router.get("", response_model=ReviewList)
def list_reviews(
    recipe_id: int,
    user_id: str | None = Depends(optional_user_id),
    user_name: str | None = Depends(current_user_name),
    session: Session = Depends(get_session),
) -> ReviewList:
    recipe = _recipe_or_404(session, recipe_id)
    reviews = get_reviews(session, recipe_id)
    return ReviewList(
        reviews=[_to_read(r, user_id) for r in reviews],
        total_reviews=len(reviews),
        average_rating=recipe.average_rating or 0.0,
        review_count=recipe.review_count or 0,
        current_user={"id": user_id, "name": user_name} if user_id else None,
    )


@router.post("", response_model=ReviewCreated, status_code=201)
def add_review(
    recipe_id: int,
    payload: ReviewCreate,
    user_id: str = Depends(current_user_id),
    user_name: str | None = Depends(current_user_name),
    session: Session = Depends(get_session),
) -> ReviewCreated:
    error = validate_review(payload.rating, payload.comment)
    if error:
        raise HTTPException(status_code=400, detail=error)
    recipe = _recipe_or_404(session, recipe_id)
    if get_user_review(session, recipe_id, user_id):
        raise HTTPException(status_code=400, detail="You have already reviewed this recipe")
    review = create_review(
        session, recipe, user_id, user_name, float(payload.rating), clean_comment(payload.comment)
    )
    if review is None:
        raise HTTPException(status_code=400, detail="You have already reviewed this recipe")
    return ReviewCreated(review=_to_read(review, user_id))


@router.put("")
def edit_review(
    recipe_id: int,
    payload: ReviewUpdate,
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> dict:
    error = validate_review(payload.rating, payload.comment)
    if error:
        raise HTTPException(status_code=400, detail=error)
    recipe = _recipe_or_404(session, recipe_id)
    review = _owned_review_or_error(session, recipe_id, payload.review_id, user_id)
    update_review(session, recipe, review, float(payload.rating), clean_comment(payload.comment))
    return {"success": True}


@router.delete("")
def remove_review(
    recipe_id: int,
    review_id: int | None = Query(default=None),
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> dict:
    recipe = _recipe_or_404(session, recipe_id)
    review = _owned_review_or_error(session, recipe_id, review_id, user_id)
    delete_review(session, recipe, review)
    return {"success": True}
