"""Tests for recipe filtering, sorting and paging."""

from datetime import datetime, timezone

import pytest

from app.services.recipe_search import (
    RecipeQuery,
    distinct_ingredients,
    distinct_tags,
    filter_recipes,
    paginate,
    search_recipes,
    sort_recipes,
)
from app.storage.models import Recipe


def _recipe(id, title, **kwargs):
    return Recipe(id=id, title=title, **kwargs)


@pytest.fixture(name="recipes")
def recipes_fixture():
    return [
        _recipe(1, "Pancakes", tags=["breakfast", "sweet"], ingredients={"Flour": "1 cup", "Egg": "2"},
                instructions=["mix", "fry"], average_rating=4.5, review_count=2),
        _recipe(2, "Omelette", tags=["breakfast"], ingredients={"Egg": "3", "Salt": "1 pinch"},
                instructions=["beat", "cook", "fold"], average_rating=3.0, review_count=5),
        _recipe(3, "brownies", tags=["sweet", "baking"], ingredients={"Flour": "200 g", "Cocoa": "50 g"},
                instructions=["mix", "bake"], average_rating=None, review_count=0),
    ]


def test_tags_match_all_by_default(recipes):
    matched = filter_recipes(recipes, RecipeQuery(tags=["breakfast", "sweet"]))
    assert [r.id for r in matched] == [1]


def test_tags_match_any(recipes):
    matched = filter_recipes(recipes, RecipeQuery(tags=["baking", "breakfast"], tag_match_type="any"))
    assert [r.id for r in matched] == [1, 2, 3]


def test_ingredients_match_all_and_any(recipes):
    assert [r.id for r in filter_recipes(recipes, RecipeQuery(ingredients=["Flour", "Egg"]))] == [1]
    query = RecipeQuery(ingredients=["Cocoa", "Salt"], ingredient_match_type="any")
    assert [r.id for r in filter_recipes(recipes, query)] == [2, 3]


def test_number_of_steps_is_exact(recipes):
    assert [r.id for r in filter_recipes(recipes, RecipeQuery(number_of_steps=2))] == [1, 3]
    assert filter_recipes(recipes, RecipeQuery(number_of_steps=7)) == []


def test_sort_by_title_ignores_case(recipes):
    assert [r.title for r in sort_recipes(recipes, "title")] == ["brownies", "Omelette", "Pancakes"]


def test_sort_by_rating_desc_puts_unrated_last(recipes):
    assert [r.id for r in sort_recipes(recipes, "average_rating", "desc")] == [1, 2, 3]


def test_sort_by_instruction_count(recipes):
    assert [r.id for r in sort_recipes(recipes, "instruction_count", "desc")][0] == 2


def test_sort_by_created_at_handles_naive_and_aware():
    older = _recipe(1, "Old", created_at=datetime(2024, 1, 1))
    newer = _recipe(2, "New", created_at=datetime(2024, 6, 1, tzinfo=timezone.utc))
    assert [r.id for r in sort_recipes([newer, older], "created_at")] == [1, 2]


def test_unknown_sort_key_falls_back_to_id(recipes):
    assert [r.id for r in sort_recipes(list(reversed(recipes)), "nonsense")] == [1, 2, 3]


def test_paginate_counts_pages(recipes):
    page = paginate(recipes, page=2, limit=2)
    assert [r.id for r in page.recipes] == [3]
    assert (page.total, page.total_pages) == (3, 2)
    assert paginate(recipes, page=5, limit=2).recipes == []


def test_search_recipes_filters_before_paging(recipes):
    result = search_recipes(recipes, RecipeQuery(tags=["sweet"], limit=1, sort_by="title"))
    assert [r.title for r in result.recipes] == ["brownies"]
    assert (result.total, result.total_pages) == (2, 2)


def test_distinct_tags_and_ingredients(recipes):
    assert distinct_tags(recipes) == ["baking", "breakfast", "sweet"]
    assert distinct_ingredients(recipes) == ["Cocoa", "Egg", "Flour", "Salt"]
