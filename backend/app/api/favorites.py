"""Per-user favorite recipes."""

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlmodel import Session

from app.api.deps import current_user_id
from app.schemas.recipe import FavoriteRecipeRead, FavoriteRequest, RecipeRead
from app.storage.db import get_session
from app.storage.repositories import (
    add_favorite,
    count_favorites,
    get_favorite,
    get_favorite_recipes,
    get_recipe,
    remove_favorite,
)

router = APIRouter(prefix="/favorites")


def _require_recipe_id(payload: FavoriteRequest) -> int:
    if payload.recipe_id is None:
        raise HTTPException(status_code=400, detail="Recipe ID is required")
    return payload.recipe_id


@router.get("")
def list_favorites(
    recipe_id: int | None = Query(default=None),
    action: str | None = Query(default=None),
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> dict:
    """
    Without params: favorited recipes, newest first.
    ?recipe_id=N: whether that recipe is a favorite. ?action=count: how many.
    """
    if recipe_id is not None:
        return {"is_favorited": get_favorite(session, user_id, recipe_id) is not None}
    if action == "count":
        return {"count": count_favorites(session, user_id)}
    favorites = [
        FavoriteRecipeRead(
            **RecipeRead.model_validate(recipe, from_attributes=True).model_dump(),
            favorited_at=favorited_at,
        )
        for recipe, favorited_at in get_favorite_recipes(session, user_id)
    ]
    return {"favorites": favorites}


@router.post("")
def create_favorite(
    payload: FavoriteRequest,
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> dict:
    recipe_id = _require_recipe_id(payload)
    if not get_recipe(session, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    if add_favorite(session, user_id, recipe_id):
        return {"message": "Recipe added to favorites"}
    return {"message": "Recipe already in favorites"}


@router.delete("")
def delete_favorite(
    payload: FavoriteRequest = Body(...),
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> dict:
    recipe_id = _require_recipe_id(payload)
    if not remove_favorite(session, user_id, recipe_id):
        raise HTTPException(status_code=404, detail="Favorite not found")
    return {"message": "Recipe removed from favorites"}
