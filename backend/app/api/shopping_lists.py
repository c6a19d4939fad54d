"""Shopping lists: create, read, replace, delete, and merge items into a list."""

from datetime import date

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlmodel import Session

from app.api.deps import current_user_id
from app.logging import get_logger
from app.schemas.shopping_list import (
    ShoppingListCreate,
    ShoppingListCreated,
    ShoppingListItemRemove,
    ShoppingListItemsAdd,
    ShoppingListItemsReplace,
    ShoppingListMergeResponse,
    ShoppingListRead,
)
from app.services.shopping_list import find_duplicate_ingredients, merge_items
from app.storage.db import get_session
from app.storage.models import ShoppingList
from app.storage.repositories import (
    create_shopping_list,
    delete_shopping_list,
    get_shopping_list,
    get_shopping_lists,
    load_items,
    save_items,
)

router = APIRouter(prefix="/shopping-lists")
logger = get_logger(__name__)


def _default_name() -> str:
    today = date.today()
    return f"Shopping List {today.month}/{today.day}/{today.year}"


def _to_read(shopping_list: ShoppingList) -> ShoppingListRead:
    return ShoppingListRead(
        id=shopping_list.id,
        name=shopping_list.name,
        items=load_items(shopping_list),
        created_at=shopping_list.created_at,
        updated_at=shopping_list.updated_at,
    )


def _owned_or_404(session: Session, list_id: int, user_id: str, for_update: bool = False) -> ShoppingList:
    shopping_list = get_shopping_list(session, list_id, user_id, for_update=for_update)
    if not shopping_list:
        raise HTTPException(status_code=404, detail="List not found")
    return shopping_list


@router.post("", response_model=ShoppingListCreated, status_code=201)
def create_list(
    payload: ShoppingListCreate,
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> ShoppingListCreated:
    # Merging into an empty list collapses duplicate ingredients from the start.
    result = merge_items([], payload.items)
    name = (payload.name or "").strip() or _default_name()
    shopping_list = create_shopping_list(session, user_id, name, result.items)
    if result.invalid_amounts:
        logger.warning(
            "shopping_list.create invalid_amounts=%s list_id=%s", result.invalid_amounts, shopping_list.id
        )
    return ShoppingListCreated(id=shopping_list.id)


@router.get("", response_model=list[ShoppingListRead])
def list_lists(
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> list[ShoppingListRead]:
    return [_to_read(sl) for sl in get_shopping_lists(session, user_id)]


@router.get("/{list_id}", response_model=ShoppingListRead)
def get_list(
    list_id: int,
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> ShoppingListRead:
    return _to_read(_owned_or_404(session, list_id, user_id))


@router.patch("/{list_id}")
def replace_items(
    list_id: int,
    payload: ShoppingListItemsReplace,
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> dict:
    """Replace all items (e.g. after toggling purchased flags)."""
    duplicates = find_duplicate_ingredients(payload.items)
    if duplicates:
        raise HTTPException(
            status_code=400, detail=f"Duplicate ingredients: {', '.join(duplicates)}"
        )
    shopping_list = _owned_or_404(session, list_id, user_id, for_update=True)
    # Unparsable amounts are saved as 0; report how many so the client can tell.
    invalid_amounts = sum(1 for item in payload.items if item.amount_defaulted)
    save_items(session, shopping_list, payload.items)
    logger.info(
        "shopping_list.replaced id=%s items=%s invalid=%s", list_id, len(payload.items), invalid_amounts
    )
    return {"success": True, "invalid_amounts": invalid_amounts}


@router.delete("/{list_id}")
def delete_list(
    list_id: int,
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> dict:
    delete_shopping_list(session, _owned_or_404(session, list_id, user_id))
    return {"success": True}


@router.post("/{list_id}/items", response_model=ShoppingListMergeResponse)
def add_items(
    list_id: int,
    payload: ShoppingListItemsAdd,
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> ShoppingListMergeResponse:
    if not payload.items:
        raise HTTPException(status_code=400, detail="Invalid items format")

    shopping_list = _owned_or_404(session, list_id, user_id, for_update=True)
    result = merge_items(load_items(shopping_list), payload.items)
    shopping_list = save_items(session, shopping_list, result.items)
    logger.info(
        "shopping_list.merge list_id=%s merged=%s added=%s invalid=%s",
        list_id,
        result.merged,
        result.added,
        result.invalid_amounts,
    )
    return ShoppingListMergeResponse(
        id=shopping_list.id,
        name=shopping_list.name,
        items=result.items,
        created_at=shopping_list.created_at,
        updated_at=shopping_list.updated_at,
        merged=result.merged,
        added=result.added,
        invalid_amounts=result.invalid_amounts,
    )


@router.delete("/{list_id}/items")
def remove_item(
    list_id: int,
    payload: ShoppingListItemRemove = Body(...),
    user_id: str = Depends(current_user_id),
    session: Session = Depends(get_session),
) -> dict:
    shopping_list = _owned_or_404(session, list_id, user_id, for_update=True)
    items = load_items(shopping_list)
    if not 0 <= payload.index < len(items):
        raise HTTPException(status_code=404, detail="Item not found")
    removed = items.pop(payload.index)
    save_items(session, shopping_list, items)
    logger.info("shopping_list.item_removed id=%s ingredient=%s", list_id, removed.ingredient)
    return {"success": True}
