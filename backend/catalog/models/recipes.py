import math
from typing import Annotated, List, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
)
from pydantic.alias_generators import to_camel

from catalog.core.lookups import ALLOWED_DIFFICULTIES, CUISINES

Number = Union[int, float]


def _finite(value: int | float) -> int | float:
    if not math.isfinite(value):
        raise ValueError("must be a finite number")
    return value


def _known_cuisine(value: int | float) -> int:
    if not float(value).is_integer() or int(value) not in CUISINES:
        raise ValueError("unknown cuisine")
    return int(value)


def _known_difficulty(value: str) -> str:
    if value not in ALLOWED_DIFFICULTIES:
        raise ValueError("unknown difficulty")
    return value


def _no_blank_items(items: List[str]) -> List[str]:
    if not all(item.strip() for item in items):
        raise ValueError("blank ingredient")
    return items


# Strict types: JSON true/false is not a number and "3" is not a cuisine id.
FiniteNumber = Annotated[Union[StrictInt, StrictFloat], AfterValidator(_finite)]
CuisineId = Annotated[Union[StrictInt, StrictFloat], AfterValidator(_known_cuisine)]
DifficultyName = Annotated[StrictStr, AfterValidator(_known_difficulty)]
IngredientList = Annotated[List[StrictStr], Field(min_length=1), AfterValidator(_no_blank_items)]


class RecipeRead(BaseModel):
    """A stored recipe as the API returns it (camelCase keys, ingredients as a list)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    cuisine: int
    difficulty: str
    cook_time: Number
    servings: Number
    image: str
    rating: Number
    ingredients: List[str]
    description: str


class RecipePage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    recipes: List[RecipeRead]
    total_count: int


class RecipeEnvelope(BaseModel):
    message: str
    data: RecipeRead


class DeletedRecipeEnvelope(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    deleted_recipe: RecipeRead


class MessageResponse(BaseModel):
    message: str


class CuisineRead(BaseModel):
    id: int
    name: str


class RecipeFilters(BaseModel):
    """Raw filter values from the query string. Blank strings count as absent."""

    title: Optional[str] = None
    cuisine: Optional[str] = None
    difficulty: Optional[str] = None
    cook_time: Optional[str] = Field(default=None, alias="cookTime")
    ingredients: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class RecipeCreate(BaseModel):
    """Create payload. Field order is the order errors are reported in."""

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")

    title: StrictStr
    cuisine: CuisineId
    difficulty: DifficultyName
    cook_time: FiniteNumber
    servings: FiniteNumber
    image: StrictStr
    rating: FiniteNumber
    ingredients: IngredientList
    description: StrictStr


class RecipeUpdate(BaseModel):
    """
    Partial update payload.

    Defaults are never validated, so an absent key stays out of
    model_fields_set while an explicit null is checked (and rejected).
    """

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")

    title: StrictStr = None  # type: ignore[assignment]
    cuisine: CuisineId = None  # type: ignore[assignment]
    difficulty: DifficultyName = None  # type: ignore[assignment]
    cook_time: FiniteNumber = None  # type: ignore[assignment]
    servings: FiniteNumber = None  # type: ignore[assignment]
    image: StrictStr = None  # type: ignore[assignment]
    rating: FiniteNumber = None  # type: ignore[assignment]
    ingredients: IngredientList = None  # type: ignore[assignment]
    description: StrictStr = None  # type: ignore[assignment]
