from typing import Optional

from sqlalchemy import Float, Text
from sqlmodel import SQLModel, Field, Column


class Cuisine(SQLModel, table=True):
    __tablename__ = "cuisine"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)


class Recipe(SQLModel, table=True):
    __tablename__ = "recipes"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    cuisine: int = Field(foreign_key="cuisine.id", index=True)
    difficulty: str = Field(index=True)
    cook_time: float = Field(sa_column=Column("cookTime", Float, nullable=False))
    servings: float = Field(sa_column=Column("servings", Float, nullable=False))
    image: str
    rating: float = Field(sa_column=Column("rating", Float, nullable=False))

    # JSON list of strings: '["2 eggs", "salt"]'. Substring filters run against this text.
    ingredients_text: str = Field(sa_column=Column("ingredients", Text, nullable=False))

    description: str = Field(sa_column=Column("description", Text, nullable=False))
