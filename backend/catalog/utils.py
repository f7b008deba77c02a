import json
from typing import Iterable, List

from catalog.models.db_models import Recipe
from catalog.models.recipes import Number, RecipeRead


def serialize_ingredients(items: Iterable[str]) -> str:
    """Encode an ingredient list for the `ingredients` text column."""
    return json.dumps(list(items), ensure_ascii=False)


def deserialize_ingredients(raw: str | None) -> List[str]:
    if not raw:
        return []
    items = json.loads(raw)
    return [str(i) for i in items]


def normalize_number(value: float | int) -> Number:
    """Float columns hand back 30.0 for 30; keep integral values as ints in JSON."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def to_read(row: Recipe) -> RecipeRead:
    return RecipeRead(
        id=row.id,
        title=row.title,
        cuisine=row.cuisine,
        difficulty=row.difficulty,
        cook_time=normalize_number(row.cook_time),
        servings=normalize_number(row.servings),
        image=row.image,
        rating=normalize_number(row.rating),
        ingredients=deserialize_ingredients(row.ingredients_text),
        description=row.description,
    )
