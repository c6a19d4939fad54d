"""Review validation and rating aggregation."""

from typing import Any, Optional

MIN_RATING = 1
MAX_RATING = 5


def validate_review(rating: Any, comment: Any) -> Optional[str]:
    """Return an error message for a bad review payload, or None when it is valid."""
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        return "Invalid rating"
    if not MIN_RATING <= rating <= MAX_RATING:
        return "Invalid rating"
    if comment is not None and not isinstance(comment, str):
        return "Invalid comment format"
    return None


def clean_comment(comment: Optional[str]) -> str:
    return (comment or "").strip()


def average_rating(ratings: list[float]) -> float:
    """Mean rating to one decimal; 0 when there are no reviews."""
    if not ratings:
        return 0.0
    return round(sum(ratings) / len(ratings), 1)
