"""Recipe browsing, detail, description edits, and catalog lookups (categories, tags, suggestions)."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from app.api.deps import current_user_id, current_user_name
from app.logging import get_logger
from app.schemas.recipe import (
    RecipeDetail,
    RecipeListResponse,
    RecipeRead,
    RecipeSuggestion,
    RecipeUpdate,
    RecipeUpdateResponse,
)
from app.services.recipe_search import RecipeQuery, distinct_tags, search_recipes
from app.storage.db import get_session
from app.storage.repositories import (
    find_recipes,
    get_all_recipes,
    get_categories,
    get_recipe,
    suggest_recipes,
    update_recipe_description,
)

router = APIRouter()
logger = get_logger(__name__)

MIN_DESCRIPTION_LENGTH = 10
MAX_SUGGESTIONS = 10


@router.get("/recipes", response_model=RecipeListResponse)
def list_recipes(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    search: str = "",
    sort_by: str = "id",
    order: Literal["asc", "desc"] = "asc",
    category: str = "",
    tags: list[str] = Query(default=[]),
    tag_match_type: Literal["all", "any"] = "all",
    ingredients: list[str] = Query(default=[]),
    ingredient_match_type: Literal["all", "any"] = "all",
    number_of_steps: int | None = Query(default=None, ge=0),
    session: Session = Depends(get_session),
) -> RecipeListResponse:
    """
    Paged recipe list. search matches titles case-insensitively; tags and
    ingredients filter with all/any semantics; number_of_steps is an exact
    instruction count. sort_by is a recipe field (title, average_rating,
    review_count, created_at) or instruction_count / ingredient_count;
    anything else keeps insertion order.
    """
    query = RecipeQuery(
        page=page,
        limit=limit,
        search=search.strip(),
        category=category.strip(),
        tags=tags,
        tag_match_type=tag_match_type,
        ingredients=ingredients,
        ingredient_match_type=ingredient_match_type,
        number_of_steps=number_of_steps,
        sort_by=sort_by,
        order=order,
    )
    candidates = find_recipes(session, search=query.search, category=query.category)
    result = search_recipes(candidates, query)
    logger.info(
        "recipes.list candidates=%s total=%s page=%s sort=%s:%s",
        len(candidates),
        result.total,
        page,
        sort_by,
        order,
    )
    return RecipeListResponse(
        recipes=[RecipeRead.model_validate(r, from_attributes=True) for r in result.recipes],
        total=result.total,
        total_pages=result.total_pages,
        categories=get_categories(session),
    )


@router.get("/recipes/{recipe_id}", response_model=RecipeDetail)
def get_recipe_detail(recipe_id: int, session: Session = Depends(get_session)) -> RecipeDetail:
    recipe = get_recipe(session, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return RecipeDetail.model_validate(recipe, from_attributes=True)


@router.patch("/recipes/{recipe_id}", response_model=RecipeUpdateResponse)
def edit_recipe_description(
    recipe_id: int,
    payload: RecipeUpdate,
    user_id: str = Depends(current_user_id),
    user_name: str | None = Depends(current_user_name),
    session: Session = Depends(get_session),
) -> RecipeUpdateResponse:
    description = payload.description
    if not isinstance(description, str) or len(description) < MIN_DESCRIPTION_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid description. Must be at least {MIN_DESCRIPTION_LENGTH} characters long.",
        )
    recipe = get_recipe(session, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    recipe = update_recipe_description(session, recipe, description, payload.user_name or user_name or user_id)
    return RecipeUpdateResponse(
        message="Recipe updated successfully",
        recipe=RecipeDetail.model_validate(recipe, from_attributes=True),
    )


@router.get("/categories")
def list_categories(session: Session = Depends(get_session)) -> list[str]:
    return get_categories(session)


@router.get("/tags")
def list_tags(session: Session = Depends(get_session)) -> list[str]:
    return distinct_tags(get_all_recipes(session))


@router.get("/suggestions")
def recipe_suggestions(
    q: str = "",
    limit: int = Query(default=MAX_SUGGESTIONS, ge=1),
    session: Session = Depends(get_session),
) -> dict:
    """Title autocomplete, at most 10 results."""
    text = q.strip()
    if not text:
        return {"suggestions": []}
    recipes = suggest_recipes(session, text, min(limit, MAX_SUGGESTIONS))
    return {"suggestions": [RecipeSuggestion(id=r.id, title=r.title, category=r.category) for r in recipes]}
