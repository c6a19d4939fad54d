from datetime import datetime
from typing import Any, Union

from pydantic import BaseModel, Field, field_serializer, model_validator

from app.logging import get_logger
from app.services.amounts import format_amount, parse_amount

logger = get_logger(__name__)


class ShoppingListItem(BaseModel):
    ingredient: str
    amount: float = 0.0  # canonical; rendered as a string in JSON
    purchased: bool = False
    added_at: datetime | None = None
    updated_at: datetime | None = None
    # Set when the incoming amount did not parse and 0 was used instead. Never serialized.
    amount_defaulted: bool = Field(default=False, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _coerce_amount(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = {**data, "amount_defaulted": False}
        if "amount" not in data:
            return data
        parsed = parse_amount(data["amount"])
        if parsed is None:
            logger.warning(
                "shopping_list.item_amount_defaulted ingredient=%s amount=%r",
                data.get("ingredient"),
                data["amount"],
            )
            data["amount"] = 0.0
            data["amount_defaulted"] = True
        else:
            data["amount"] = parsed
        return data

    @field_serializer("amount")
    def _serialize_amount(self, amount: float) -> str:
        return format_amount(amount)


class NewShoppingListItem(BaseModel):
    """Item as posted by a client; amount is kept raw so bad values can be counted."""

    ingredient: str = Field(min_length=1)
    amount: Union[str, float, None] = None


class ShoppingListCreate(BaseModel):
    name: str | None = None
    items: list[NewShoppingListItem] = []


class ShoppingListItemsAdd(BaseModel):
    items: list[NewShoppingListItem] | None = None


class ShoppingListItemsReplace(BaseModel):
    items: list[ShoppingListItem]


class ShoppingListItemRemove(BaseModel):
    index: int


class ShoppingListRead(BaseModel):
    id: int
    name: str
    items: list[ShoppingListItem]
    created_at: datetime
    updated_at: datetime


class ShoppingListCreated(BaseModel):
    id: int


class ShoppingListMergeResponse(ShoppingListRead):
    merged: int
    added: int
    invalid_amounts: int
