from fastapi import APIRouter

from app.api.favorites import router as favorites_router
from app.api.health import router as health_router
from app.api.ingredients import router as ingredients_router
from app.api.recipes import router as recipes_router
from app.api.recommended import router as recommended_router
from app.api.reviews import router as reviews_router
from app.api.shopping_lists import router as shopping_lists_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(recipes_router)
router.include_router(reviews_router)
router.include_router(shopping_lists_router)
router.include_router(ingredients_router)
router.include_router(recommended_router)
router.include_router(favorites_router)
