"""
Shopping-list merge.

Adding a batch of ingredients to a list sums quantities into items whose
ingredient name already exists (case-insensitive) and appends the rest.
Pure: no I/O, inputs are never mutated. The caller persists the result.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional

from app.logging import get_logger
from app.schemas.shopping_list import NewShoppingListItem, ShoppingListItem
from app.services.amounts import parse_amount

logger = get_logger(__name__)


@dataclass
class MergeResult:
    items: list[ShoppingListItem] = field(default_factory=list)
    merged: int = 0
    added: int = 0
    # Amounts that could not be used: unparsable input, stored values that
    # were defaulted to 0 on load, and sums that overflowed.
    invalid_amounts: int = 0


def _index_of(items: list[ShoppingListItem], ingredient: str) -> int:
    key = ingredient.lower()
    for i, item in enumerate(items):
        if item.ingredient.lower() == key:
            return i
    return -1


def merge_items(
    existing_items: Iterable[ShoppingListItem],
    new_items: Iterable[NewShoppingListItem],
    now: Optional[datetime] = None,
) -> MergeResult:
    """
    Merge new_items into a copy of existing_items.

    Matching items (case-insensitive ingredient) get their amounts summed and
    rounded to 2 decimals; the existing casing and purchased flag are kept.
    Unmatched items are appended with purchased=False. An amount that does
    not parse contributes 0 and is counted in invalid_amounts, as is an
    existing item whose stored amount was defaulted to 0 on load.
    """
    now = now or datetime.now(timezone.utc)
    result = MergeResult(items=[item.model_copy() for item in existing_items])
    result.invalid_amounts = sum(1 for item in result.items if item.amount_defaulted)

    for new_item in new_items:
        amount = parse_amount(new_item.amount)
        if amount is None:
            result.invalid_amounts += 1
            logger.warning(
                "shopping_list.invalid_amount ingredient=%s amount=%r",
                new_item.ingredient,
                new_item.amount,
            )
            amount = 0.0

        idx = _index_of(result.items, new_item.ingredient)
        if idx == -1:
            result.items.append(
                ShoppingListItem(
                    ingredient=new_item.ingredient,
                    amount=amount,
                    purchased=False,
                    added_at=now,
                )
            )
            result.added += 1
            continue

        current = result.items[idx]
        total = round(current.amount + amount, 2)
        if not math.isfinite(total):
            result.invalid_amounts += 1
            logger.warning(
                "shopping_list.amount_overflow ingredient=%s current=%r added=%r",
                current.ingredient,
                current.amount,
                amount,
            )
            continue
        result.items[idx] = current.model_copy(
            update={"amount": total, "updated_at": now, "amount_defaulted": False}
        )
        result.merged += 1

    return result


def find_duplicate_ingredients(items: Iterable[ShoppingListItem]) -> list[str]:
    """Ingredient names that appear more than once, compared case-insensitively."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for item in items:
        key = item.ingredient.lower()
        if key in seen and item.ingredient not in duplicates:
            duplicates.append(item.ingredient)
        seen.add(key)
    return duplicates
