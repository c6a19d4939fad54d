from datetime import datetime
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.logging import get_logger
from app.schemas.shopping_list import ShoppingListItem
from app.services.reviews import average_rating
from app.storage.models import Favorite, Recipe, Review, ShoppingList, utcnow

logger = get_logger(__name__)


def _dump_items(items: Iterable[ShoppingListItem]) -> list[dict]:
    # Amounts stay numeric in storage; string formatting happens in the response.
    return [
        {**item.model_dump(mode="json", exclude={"amount"}), "amount": item.amount}
        for item in items
    ]


def load_items(shopping_list: ShoppingList) -> list[ShoppingListItem]:
    """Stored items; any whose amount did not parse come back with amount_defaulted set."""
    return [ShoppingListItem.model_validate(raw) for raw in shopping_list.items or []]


def create_shopping_list(
    session: Session, user_id: str, name: str, items: Iterable[ShoppingListItem]
) -> ShoppingList:
    shopping_list = ShoppingList(user_id=user_id, name=name, items=_dump_items(items))
    session.add(shopping_list)
    session.commit()
    session.refresh(shopping_list)
    logger.info(
        "shopping_list.created id=%s user=%s items=%s",
        shopping_list.id,
        user_id,
        len(shopping_list.items),
    )
    return shopping_list


def get_shopping_lists(session: Session, user_id: str) -> list[ShoppingList]:
    return list(
        session.exec(
            select(ShoppingList)
            .where(ShoppingList.user_id == user_id)
            .order_by(ShoppingList.created_at.desc(), ShoppingList.id.desc())
        )
    )


def get_shopping_list(
    session: Session, list_id: int, user_id: str, for_update: bool = False
) -> ShoppingList | None:
    """Owned list or None. for_update row-locks it until commit so concurrent merges serialize."""
    stmt = select(ShoppingList).where(ShoppingList.id == list_id, ShoppingList.user_id == user_id)
    if for_update:
        stmt = stmt.with_for_update()
    return session.exec(stmt).first()


def save_items(
    session: Session, shopping_list: ShoppingList, items: Iterable[ShoppingListItem]
) -> ShoppingList:
    # Assign a fresh list so the JSON column is flagged dirty.
    shopping_list.items = _dump_items(items)
    shopping_list.updated_at = utcnow()
    session.add(shopping_list)
    session.commit()
    session.refresh(shopping_list)
    return shopping_list


def delete_shopping_list(session: Session, shopping_list: ShoppingList) -> None:
    list_id = shopping_list.id
    session.delete(shopping_list)
    session.commit()
    logger.info("shopping_list.deleted id=%s", list_id)


def get_recipe(session: Session, recipe_id: int) -> Recipe | None:
    return session.get(Recipe, recipe_id)


def _title_contains(text: str):
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return Recipe.title.ilike(f"%{escaped}%", escape="\\")


def find_recipes(session: Session, search: str = "", category: str = "") -> list[Recipe]:
    """Recipes whose title contains `search` (case-insensitive), optionally in one category."""
    stmt = select(Recipe)
    if search:
        stmt = stmt.where(_title_contains(search))
    if category:
        stmt = stmt.where(Recipe.category == category)
    return list(session.exec(stmt.order_by(Recipe.id)))


def get_all_recipes(session: Session) -> list[Recipe]:
    return list(session.exec(select(Recipe)))


def get_categories(session: Session) -> list[str]:
    rows = session.exec(
        select(Recipe.category).where(Recipe.category.is_not(None)).distinct().order_by(Recipe.category)
    )
    return [c for c in rows if c]


def suggest_recipes(session: Session, query: str, limit: int) -> list[Recipe]:
    return list(
        session.exec(
            select(Recipe)
            .where(_title_contains(query))
            .order_by(Recipe.title)
            .limit(limit)
        )
    )


def update_recipe_description(
    session: Session, recipe: Recipe, description: str, user_name: str | None
) -> Recipe:
    """Set a new description and append it to the recipe's edit history."""
    now = utcnow()
    recipe.description = description
    recipe.last_modified = now
    recipe.user_versions = [
        *(recipe.user_versions or []),
        {"user_name": user_name, "description": description, "last_modified": now.isoformat()},
    ]
    recipe.update_count = (recipe.update_count or 0) + 1
    session.add(recipe)
    session.commit()
    session.refresh(recipe)
    logger.info("recipe.updated id=%s update_count=%s user=%s", recipe.id, recipe.update_count, user_name)
    return recipe


def get_top_rated_recipes(session: Session, limit: int) -> list[Recipe]:
    return list(
        session.exec(
            select(Recipe)
            .where(Recipe.average_rating.is_not(None), Recipe.average_rating > 0)
            .order_by(Recipe.average_rating.desc())
            .limit(limit)
        )
    )


def get_reviews(session: Session, recipe_id: int) -> list[Review]:
    return list(
        session.exec(
            select(Review).where(Review.recipe_id == recipe_id).order_by(Review.created_at, Review.id)
        )
    )


def get_review(session: Session, recipe_id: int, review_id: int) -> Review | None:
    return session.exec(
        select(Review).where(Review.id == review_id, Review.recipe_id == recipe_id)
    ).first()


def get_user_review(session: Session, recipe_id: int, user_id: str) -> Review | None:
    return session.exec(
        select(Review).where(Review.recipe_id == recipe_id, Review.user_id == user_id)
    ).first()


def refresh_recipe_rating(session: Session, recipe: Recipe) -> Recipe:
    """Recompute average_rating and review_count from the stored reviews."""
    ratings = [review.rating for review in get_reviews(session, recipe.id)]
    recipe.average_rating = average_rating(ratings)
    recipe.review_count = len(ratings)
    session.add(recipe)
    session.commit()
    session.refresh(recipe)
    logger.info(
        "recipe.rating id=%s average=%s reviews=%s", recipe.id, recipe.average_rating, recipe.review_count
    )
    return recipe


def create_review(
    session: Session, recipe: Recipe, user_id: str, username: str | None, rating: float, comment: str
) -> Review | None:
    """Insert a review. None when this user already reviewed the recipe."""
    review = Review(recipe_id=recipe.id, user_id=user_id, username=username, rating=rating, comment=comment)
    session.add(review)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        return None
    session.refresh(review)
    refresh_recipe_rating(session, recipe)
    logger.info("review.created id=%s recipe_id=%s user=%s", review.id, recipe.id, user_id)
    return review


def update_review(session: Session, recipe: Recipe, review: Review, rating: float, comment: str) -> Review:
    review.rating = rating
    review.comment = comment
    review.updated_at = utcnow()
    session.add(review)
    session.commit()
    session.refresh(review)
    refresh_recipe_rating(session, recipe)
    return review


def delete_review(session: Session, recipe: Recipe, review: Review) -> None:
    review_id = review.id
    session.delete(review)
    session.commit()
    refresh_recipe_rating(session, recipe)
    logger.info("review.deleted id=%s recipe_id=%s", review_id, recipe.id)


def get_favorite(session: Session, user_id: str, recipe_id: int) -> Favorite | None:
    return session.exec(
        select(Favorite).where(Favorite.user_id == user_id, Favorite.recipe_id == recipe_id)
    ).first()


def count_favorites(session: Session, user_id: str) -> int:
    return session.exec(
        select(func.count()).select_from(Favorite).where(Favorite.user_id == user_id)
    ).one()


def get_favorite_recipes(session: Session, user_id: str) -> list[tuple[Recipe, datetime]]:
    rows = session.exec(
        select(Recipe, Favorite.created_at)
        .join(Favorite, Favorite.recipe_id == Recipe.id)
        .where(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
    )
    return [(recipe, favorited_at) for recipe, favorited_at in rows]


def add_favorite(session: Session, user_id: str, recipe_id: int) -> bool:
    """Insert if absent. Returns False when the recipe was already a favorite."""
    if get_favorite(session, user_id, recipe_id):
        return False
    session.add(Favorite(user_id=user_id, recipe_id=recipe_id))
    try:
        session.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same pair.
        session.rollback()
        return False
    logger.info("favorite.added user=%s recipe_id=%s", user_id, recipe_id)
    return True


def remove_favorite(session: Session, user_id: str, recipe_id: int) -> bool:
    favorite = get_favorite(session, user_id, recipe_id)
    if not favorite:
        return False
    session.delete(favorite)
    session.commit()
    logger.info("favorite.removed user=%s recipe_id=%s", user_id, recipe_id)
    return True
