"""
Recipe browsing: filter, sort and page recipe rows.

Title search and category are pushed into SQL by the repository; tags,
ingredients and step counts live in JSON columns and are filtered here,
over the rows SQL already narrowed down.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional

from app.storage.models import Recipe

MATCH_ALL = "all"
MATCH_ANY = "any"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_aware(value: Optional[datetime]) -> datetime:
    # SQLite hands timestamps back naive; Postgres keeps the zone.
    if value is None:
        return _EPOCH
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


SORT_KEYS: dict[str, Callable[[Recipe], Any]] = {
    "id": lambda r: r.id or 0,
    "title": lambda r: (r.title or "").lower(),
    "average_rating": lambda r: r.average_rating or 0.0,
    "review_count": lambda r: r.review_count or 0,
    "created_at": lambda r: _as_aware(r.created_at),
    "instruction_count": lambda r: len(r.instructions or []),
    "ingredient_count": lambda r: len(r.ingredients or {}),
}


@dataclass
class RecipeQuery:
    page: int = 1
    limit: int = 20
    search: str = ""
    category: str = ""
    tags: list[str] = field(default_factory=list)
    tag_match_type: str = MATCH_ALL
    ingredients: list[str] = field(default_factory=list)
    ingredient_match_type: str = MATCH_ALL
    number_of_steps: Optional[int] = None
    sort_by: str = "id"
    order: str = "asc"


@dataclass
class RecipePage:
    recipes: list[Recipe]
    total: int
    total_pages: int


def _matches(wanted: list[str], present: Iterable[str], match_type: str) -> bool:
    have = set(present)
    if match_type == MATCH_ANY:
        return any(w in have for w in wanted)
    return all(w in have for w in wanted)


def filter_recipes(recipes: Iterable[Recipe], query: RecipeQuery) -> list[Recipe]:
    """Apply the JSON-column filters (tags, ingredients, number of steps)."""
    out = []
    for recipe in recipes:
        if query.tags and not _matches(query.tags, recipe.tags or [], query.tag_match_type):
            continue
        if query.ingredients and not _matches(
            query.ingredients, (recipe.ingredients or {}).keys(), query.ingredient_match_type
        ):
            continue
        if query.number_of_steps is not None and len(recipe.instructions or []) != query.number_of_steps:
            continue
        out.append(recipe)
    return out


def sort_recipes(recipes: list[Recipe], sort_by: str, order: str = "asc") -> list[Recipe]:
    key = SORT_KEYS.get(sort_by, SORT_KEYS["id"])
    return sorted(recipes, key=key, reverse=order == "desc")


def paginate(recipes: list[Recipe], page: int, limit: int) -> RecipePage:
    total = len(recipes)
    start = (page - 1) * limit
    return RecipePage(
        recipes=recipes[start:start + limit],
        total=total,
        total_pages=math.ceil(total / limit) if limit else 0,
    )


def search_recipes(candidates: Iterable[Recipe], query: RecipeQuery) -> RecipePage:
    """Filter, sort and page rows already narrowed by title search and category."""
    matched = filter_recipes(candidates, query)
    return paginate(sort_recipes(matched, query.sort_by, query.order), query.page, query.limit)


def distinct_tags(recipes: Iterable[Recipe]) -> list[str]:
    return sorted({tag for r in recipes for tag in (r.tags or [])})


def distinct_ingredients(recipes: Iterable[Recipe]) -> list[str]:
    return sorted({name for r in recipes for name in (r.ingredients or {})})

