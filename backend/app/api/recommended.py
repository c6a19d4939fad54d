from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.config import settings
from app.logging import get_logger
from app.schemas.recipe import RecipeRead
from app.services.recommend import unique_by_id
from app.storage.db import get_session
from app.storage.repositories import get_top_rated_recipes

router = APIRouter()
logger = get_logger(__name__)


@router.get("/recommended")
def recommended_recipes(session: Session = Depends(get_session)) -> dict:
    """Top-rated recipes, duplicates dropped."""
    candidates = get_top_rated_recipes(session, settings.recommended_fetch_limit)
    recipes = unique_by_id(candidates, settings.recommended_limit)
    logger.info("recommended.fetched candidates=%s returned=%s", len(candidates), len(recipes))
    return {"recipes": [RecipeRead.model_validate(r, from_attributes=True) for r in recipes]}
