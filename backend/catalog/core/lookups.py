from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


# Shared by validation, the cuisine table bootstrap and error responses.
CUISINES: Mapping[int, str] = MappingProxyType(
    {
        1: "Italian",
        2: "Indian",
        3: "American",
        4: "Mexican",
        5: "Thai",
        6: "Greek",
        7: "Japanese",
        8: "British",
        9: "Moroccan",
        10: "Korean",
        11: "French",
    }
)

ALLOWED_DIFFICULTIES = tuple(d.value for d in Difficulty)

# Field order matters: validation reports the first failure in this order.
RECIPE_FIELDS = (
    "title",
    "cuisine",
    "difficulty",
    "cookTime",
    "servings",
    "image",
    "rating",
    "ingredients",
    "description",
)
