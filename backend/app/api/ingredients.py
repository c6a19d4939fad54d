"""Ingredient names across recipes, and display units for ingredient names."""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlmodel import Session

from app.services.recipe_search import distinct_ingredients
from app.services.units import classify_unit, classify_units, get_unit_categories
from app.storage.db import get_session
from app.storage.repositories import get_all_recipes

router = APIRouter(prefix="/ingredients")


class UnitsRequest(BaseModel):
    names: list[str]


@router.get("")
def list_ingredients(session: Session = Depends(get_session)) -> list[str]:
    """Every ingredient name used by some recipe, sorted."""
    return distinct_ingredients(get_all_recipes(session))


@router.get("/unit")
def get_unit(name: str = Query(...)) -> dict:
    return {"name": name, "unit": classify_unit(name)}


@router.post("/units")
def get_units(payload: UnitsRequest) -> dict:
    return {"units": classify_units(payload.names)}


@router.get("/unit-categories")
def unit_categories() -> dict:
    """Categories in the order they are tried."""
    return {"categories": get_unit_categories()}
