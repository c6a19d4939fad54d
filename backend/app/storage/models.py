from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, JSON, UniqueConstraint
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp_column(nullable: bool = False) -> Column:
    return Column(DateTime(timezone=True), nullable=nullable)


class Recipe(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    description: str = ""
    category: Optional[str] = Field(default=None, index=True)
    tags: list = Field(default_factory=list, sa_column=Column(JSON, default=list))
    ingredients: dict = Field(default_factory=dict, sa_column=Column(JSON, default=dict))  # name -> amount text
    instructions: list = Field(default_factory=list, sa_column=Column(JSON, default=list))
    average_rating: Optional[float] = Field(default=None, index=True)  # kept in sync with reviews
    review_count: int = 0
    # Description edits: [{"user_name", "description", "last_modified"}], oldest first.
    user_versions: list = Field(default_factory=list, sa_column=Column(JSON, default=list))
    update_count: int = 0
    last_modified: Optional[datetime] = Field(default=None, sa_column=_timestamp_column(nullable=True))
    created_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())


class Review(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("recipe_id", "user_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    recipe_id: int = Field(foreign_key="recipe.id", index=True)
    user_id: str
    username: Optional[str] = None
    rating: float
    comment: str = ""
    created_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())
    updated_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())


class ShoppingList(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    name: str
    # Serialized ShoppingListItem dicts; amounts stored as numbers.
    items: list = Field(default_factory=list, sa_column=Column(JSON, default=list))
    created_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())
    updated_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())


class Favorite(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("user_id", "recipe_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    recipe_id: int = Field(foreign_key="recipe.id")
    created_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())
