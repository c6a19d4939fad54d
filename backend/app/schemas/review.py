from datetime import datetime
from typing import Any

from pydantic import BaseModel


class ReviewRead(BaseModel):
    id: int
    user_id: str
    username: str | None = None
    rating: float
    comment: str = ""
    created_at: datetime
    updated_at: datetime
    is_owner: bool = False


class ReviewList(BaseModel):
    reviews: list[ReviewRead]
    total_reviews: int
    average_rating: float
    review_count: int
    current_user: dict[str, Any] | None = None


class ReviewCreate(BaseModel):
    # Left untyped so a bad rating is answered with 400 "Invalid rating", not a 422.
    rating: Any = None
    comment: Any = None


class ReviewUpdate(ReviewCreate):
    review_id: int | None = None


class ReviewCreated(BaseModel):
    review: ReviewRead
