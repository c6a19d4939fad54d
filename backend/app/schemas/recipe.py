from datetime import datetime
from typing import Any

from pydantic import BaseModel


class RecipeRead(BaseModel):
    id: int
    title: str
    description: str = ""
    category: str | None = None
    tags: list[str] = []
    ingredients: dict[str, str] = {}
    instructions: list[str] = []
    average_rating: float | None = None
    review_count: int = 0
    update_count: int = 0
    last_modified: datetime | None = None
    created_at: datetime


class RecipeDetail(RecipeRead):
    user_versions: list[dict[str, Any]] = []


class RecipeListResponse(BaseModel):
    recipes: list[RecipeRead]
    total: int
    total_pages: int
    categories: list[str]


class RecipeUpdate(BaseModel):
    description: Any = None
    user_name: str | None = None


class RecipeUpdateResponse(BaseModel):
    message: str
    recipe: RecipeDetail


class RecipeSuggestion(BaseModel):
    id: int
    title: str
    category: str | None = None


class FavoriteRecipeRead(RecipeRead):
    favorited_at: datetime


class FavoriteRequest(BaseModel):
    recipe_id: int | None = None
