"""
Input validation for the recipe endpoints.

Query parameters are parsed here by hand; request bodies go through the
RecipeCreate / RecipeUpdate pydantic models and the first pydantic error is
translated into the API's error message. Checks follow a fixed field order
and stop at the first violation, so a request gets exactly one error message
(except missing fields on create, which are reported together).
"""
import re
from typing import Any, Dict, Mapping

from pydantic import ValidationError as PydanticValidationError

from catalog.core.errors import (
    InvalidCuisine,
    InvalidParameter,
    MissingFields,
    NoUpdateData,
    ValidationError,
)
from catalog.core.lookups import ALLOWED_DIFFICULTIES, CUISINES, RECIPE_FIELDS
from catalog.models.recipes import RecipeCreate, RecipeUpdate

# LIMIT / OFFSET are bound as signed 64-bit integers.
MAX_SQL_INT = 2**63 - 1

# Plain decimal notation only: "12", "-3", "1.5", ".5", "1e3".
# "inf", "nan" and "1_000" are not numbers here.
_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_number(text: str) -> float | None:
    """Parse decimal text; blank reads as 0, anything else unparseable is None."""
    text = text.strip()
    if not text:
        return 0.0
    if not _NUMBER_RE.fullmatch(text):
        return None
    return float(text)


def parse_pagination_param(name: str, raw: str | int | None, default: int) -> int:
    """
    Parse `page` / `limit` from the query string.

    Accepts anything that reads as a number ("2", " 3 ", "1e1"); a blank value
    reads as 0 and is then rejected by the positivity check.
    """
    if raw is None:
        return default

    number = float(raw) if isinstance(raw, int) else parse_number(raw)
    if number is None:
        raise InvalidParameter(f"Parameter '{name}' must be a valid number.")

    if not number.is_integer():
        raise InvalidParameter(f"Parameter '{name}' must be an integer.")

    if number <= 0:
        raise InvalidParameter(f"Parameter '{name}' must be greater than 0.")

    if number > MAX_SQL_INT:
        raise InvalidParameter(f"Parameter '{name}' must not exceed {MAX_SQL_INT}.")

    return int(number)


def validate_pagination(page: str | int | None, limit: str | int | None,
                        default_page: int = 1, default_limit: int = 6) -> tuple[int, int]:
    page_num = parse_pagination_param("page", page, default_page)
    limit_num = parse_pagination_param("limit", limit, default_limit)

    if (page_num - 1) * limit_num > MAX_SQL_INT:
        raise InvalidParameter("Parameter 'page' is too large for the given 'limit'.")

    return page_num, limit_num


_TYPE_MESSAGES = {
    "title": "'title' must be a string.",
    "cookTime": "'cookTime' must be a number.",
    "servings": "'servings' must be a number.",
    "image": "'image' must be a string (URL).",
    "rating": "'rating' must be a number.",
    "description": "'description' must be a string.",
}


def _raise_first_error(exc: PydanticValidationError) -> None:
    error = exc.errors()[0]
    loc = error["loc"]
    field = loc[0]

    if field == "cuisine":
        raise InvalidCuisine(CUISINES)

    if field == "difficulty":
        if error["type"] == "value_error":
            raise ValidationError(
                f"'difficulty' must be one of {', '.join(ALLOWED_DIFFICULTIES)}."
            )
        raise ValidationError("'difficulty' must be a string.")

    if field == "ingredients":
        if len(loc) > 1:
            raise ValidationError("Every ingredient must be a string.")
        if error["type"] == "too_short":
            raise ValidationError("'ingredients' cannot be an empty array.")
        if error["type"] == "value_error":
            raise ValidationError("Every ingredient must be a non-empty string.")
        raise ValidationError("'ingredients' must be an array.")

    raise ValidationError(_TYPE_MESSAGES[str(field)])


def _require_body(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("The body of the request is missing.")
    return payload


def validate_new_recipe(payload: Any) -> Dict[str, Any]:
    """Validate a full create payload. Returns the recognised fields, in field order."""
    body = _require_body(payload)

    missing = [f for f in RECIPE_FIELDS if body.get(f) is None]
    if missing:
        raise MissingFields(missing)

    try:
        recipe = RecipeCreate.model_validate(body)
    except PydanticValidationError as e:
        _raise_first_error(e)
        raise

    return recipe.model_dump(by_alias=True)


def validate_recipe_update(payload: Any) -> Dict[str, Any]:
    """
    Validate a partial update payload.

    Only keys present in the payload are checked (an explicit null is present
    and fails its type rule). Unknown keys are ignored.
    """
    body = _require_body(payload)

    try:
        changes = RecipeUpdate.model_validate(body)
    except PydanticValidationError as e:
        _raise_first_error(e)
        raise

    if not changes.model_fields_set:
        raise NoUpdateData()
    return changes.model_dump(by_alias=True, exclude_unset=True)
