import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col

from catalog.core.config import settings
from catalog.core.errors import InternalError, NotFound
from catalog.db import get_session
from catalog.models.db_models import Recipe
from catalog.models.recipes import (
    DeletedRecipeEnvelope,
    MessageResponse,
    RecipeEnvelope,
    RecipeFilters,
    RecipePage,
    RecipeRead,
)
from catalog.services.recipe_query import compose_recipe_query, fetch_recipe_page
from catalog.services.seeding import load_seed_recipes, seed_recipes
from catalog.services.validation import (
    validate_new_recipe,
    validate_pagination,
    validate_recipe_update,
)
from catalog.utils import serialize_ingredients, to_read

logger = logging.getLogger(__name__)

router = APIRouter()

# API field name -> Recipe attribute
_COLUMNS = {
    "title": "title",
    "cuisine": "cuisine",
    "difficulty": "difficulty",
    "cookTime": "cook_time",
    "servings": "servings",
    "image": "image",
    "rating": "rating",
    "ingredients": "ingredients_text",
    "description": "description",
}


def _column_values(fields: Dict[str, Any]) -> Dict[str, Any]:
    values = {_COLUMNS[k]: v for k, v in fields.items()}
    if "ingredients_text" in values:
        values["ingredients_text"] = serialize_ingredients(values["ingredients_text"])
    return values


def _get_existing(session: Session, recipe_id: int) -> Recipe:
    recipe: Recipe | None = session.get(Recipe, recipe_id)
    if not recipe:
        raise NotFound(f"Recipe with id {recipe_id} not found.")
    return recipe


@router.get("/recipes", response_model=RecipePage)
def list_recipes(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    title: Optional[str] = None,
    cuisine: Optional[str] = None,
    difficulty: Optional[str] = None,
    cook_time: Optional[str] = Query(default=None, alias="cookTime"),
    ingredients: Optional[str] = None,
    session: Session = Depends(get_session),
) -> RecipePage:
    """
    One page of recipes plus the total number of matches.

    `cuisine` and `cookTime` must read as numbers; anything else is a 400
    rather than a query that matches no rows. Unknown query parameters are
    ignored.
    """
    page_num, limit_num = validate_pagination(
        page, limit, settings.default_page, settings.default_limit
    )
    filters = RecipeFilters(
        title=title,
        cuisine=cuisine,
        difficulty=difficulty,
        cook_time=cook_time,
        ingredients=ingredients,
    )
    query = compose_recipe_query(filters, page_num, limit_num)

    try:
        rows, total = fetch_recipe_page(session, query)
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch recipes")
        raise InternalError("Error fetching recipes", e)

    return RecipePage(recipes=[to_read(r) for r in rows], total_count=total)


@router.post("/recipes/seed", response_model=MessageResponse)
def seed(session: Session = Depends(get_session)) -> MessageResponse:
    try:
        seed_recipes(session, load_seed_recipes())
    except (SQLAlchemyError, OSError, KeyError, ValueError) as e:
        session.rollback()
        logger.exception("Seeding recipes failed")
        raise InternalError("Internal Server Error.", e)

    return MessageResponse(message="Recipes inserted correctly.")


@router.get("/recipes/{recipe_id}", response_model=RecipeRead)
def get_recipe(
    recipe_id: int,
    session: Session = Depends(get_session),
) -> RecipeRead:
    try:
        recipe = _get_existing(session, recipe_id)
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch recipe %s", recipe_id)
        raise InternalError("Error fetching recipes", e)
    return to_read(recipe)


@router.post("/recipes", response_model=RecipeEnvelope, status_code=201)
def create_recipe(
    payload: Any = Body(default=None),
    session: Session = Depends(get_session),
) -> RecipeEnvelope:
    fields = validate_new_recipe(payload)

    try:
        recipe = Recipe(**_column_values(fields))
        session.add(recipe)
        session.commit()
        inserted_id = recipe.id

        inserted = session.get(Recipe, inserted_id) if inserted_id is not None else None
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Failed to create recipe")
        raise InternalError("Error creating recipe", e)

    if inserted is None:
        raise InternalError("Error creating recipe")

    logger.info("Created recipe %s", inserted_id)
    return RecipeEnvelope(message="Recipe created successfully", data=to_read(inserted))


@router.put("/recipes/{recipe_id}", response_model=RecipeEnvelope)
def update_recipe(
    recipe_id: int,
    payload: Any = Body(default=None),
    session: Session = Depends(get_session),
) -> RecipeEnvelope:
    try:
        _get_existing(session, recipe_id)
    except SQLAlchemyError as e:
        logger.exception("Failed to look up recipe %s", recipe_id)
        raise InternalError("Error updating recipe", e)

    changes = validate_recipe_update(payload)

    # Existence check and UPDATE are separate statements; a concurrent delete
    # in between shows up as zero affected rows.
    try:
        result = session.exec(  # type: ignore[call-overload]
            update(Recipe)
            .where(col(Recipe.id) == recipe_id)
            .values({getattr(Recipe, k): v for k, v in _column_values(changes).items()})
        )
        if result.rowcount == 0:
            session.rollback()
            raise NotFound(f"No recipe found with id {recipe_id}.")
        session.commit()

        updated = session.get(Recipe, recipe_id)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Failed to update recipe %s", recipe_id)
        raise InternalError("Error updating recipe", e)

    if updated is None:
        raise NotFound(f"No recipe found with id {recipe_id}.")

    logger.info("Updated recipe %s (%s)", recipe_id, ", ".join(changes))
    return RecipeEnvelope(message="Recipe updated successfully", data=to_read(updated))


@router.delete("/recipes/{recipe_id}", response_model=DeletedRecipeEnvelope)
def delete_recipe(
    recipe_id: int,
    session: Session = Depends(get_session),
) -> DeletedRecipeEnvelope:
    try:
        snapshot = to_read(_get_existing(session, recipe_id))

        result = session.exec(  # type: ignore[call-overload]
            delete(Recipe).where(col(Recipe.id) == recipe_id)
        )
        if result.rowcount == 0:
            session.rollback()
            raise NotFound(f"No recipe found with id {recipe_id}.")
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Failed to delete recipe %s", recipe_id)
        raise InternalError("Error deleting recipe", e)

    logger.info("Deleted recipe %s", recipe_id)
    return DeletedRecipeEnvelope(message="Recipe deleted successfully", deleted_recipe=snapshot)
