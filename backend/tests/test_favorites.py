"""Tests for the favorites API."""

from app.storage.models import Favorite


def test_add_and_list_favorites(client, make_recipe):
    soup = make_recipe("Soup", average_rating=4.0, tags=["easy"], ingredients={"Water": "1 l"})
    stew = make_recipe("Stew")

    for recipe in (soup, stew):
        response = client.post("/api/favorites", json={"recipe_id": recipe.id})
        assert response.status_code == 200
        assert response.json()["message"] == "Recipe added to favorites"

    favorites = client.get("/api/favorites").json()["favorites"]
    assert {f["title"] for f in favorites} == {"Soup", "Stew"}
    soup_fav = next(f for f in favorites if f["title"] == "Soup")
    assert soup_fav["tags"] == ["easy"]
    assert soup_fav["ingredients"] == {"Water": "1 l"}
    assert soup_fav["favorited_at"]


def test_add_favorite_is_idempotent(client, make_recipe, session):
    recipe = make_recipe("Soup")
    client.post("/api/favorites", json={"recipe_id": recipe.id})
    response = client.post("/api/favorites", json={"recipe_id": recipe.id})
    assert response.json()["message"] == "Recipe already in favorites"
    assert client.get("/api/favorites", params={"action": "count"}).json() == {"count": 1}


def test_add_favorite_validation(client):
    response = client.post("/api/favorites", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "Recipe ID is required"
    response = client.post("/api/favorites", json={"recipe_id": 404})
    assert response.status_code == 404


def test_is_favorited(client, make_recipe):
    recipe = make_recipe("Soup")
    params = {"recipe_id": recipe.id}
    assert client.get("/api/favorites", params=params).json() == {"is_favorited": False}
    client.post("/api/favorites", json={"recipe_id": recipe.id})
    assert client.get("/api/favorites", params=params).json() == {"is_favorited": True}


def test_favorites_are_per_user(client, make_recipe, session):
    recipe = make_recipe("Soup")
    session.add(Favorite(user_id="someone-else", recipe_id=recipe.id))
    session.commit()
    assert client.get("/api/favorites").json() == {"favorites": []}
    assert client.get("/api/favorites", params={"action": "count"}).json() == {"count": 0}


def test_remove_favorite(client, make_recipe):
    recipe = make_recipe("Soup")
    client.post("/api/favorites", json={"recipe_id": recipe.id})
    response = client.request("DELETE", "/api/favorites", json={"recipe_id": recipe.id})
    assert response.status_code == 200
    assert response.json()["message"] == "Recipe removed from favorites"
    response = client.request("DELETE", "/api/favorites", json={"recipe_id": recipe.id})
    assert response.status_code == 404
    assert response.json()["detail"] == "Favorite not found"


def test_favorites_require_user(anon_client):
    assert anon_client.get("/api/favorites").status_code == 401
