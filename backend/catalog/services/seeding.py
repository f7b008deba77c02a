import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from sqlmodel import Session

from catalog.core.config import settings
from catalog.models.db_models import Recipe
from catalog.utils import serialize_ingredients

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def load_seed_recipes(path: Path | None = None) -> tuple[Dict[str, Any], ...]:
    """Read the fixed dataset once per path. The file holds {"recipes": [...]}."""
    path = path or settings.seed_data_path
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return tuple(data["recipes"])


def seed_recipes(session: Session, recipes: List[Dict[str, Any]] | tuple[Dict[str, Any], ...]) -> int:
    """
    Insert every record as-is.

    There is no duplicate check and each row is committed on its own, so a
    failure part way through leaves the rows inserted before it.
    """
    inserted = 0
    for r in recipes:
        session.add(
            Recipe(
                title=r["title"],
                cuisine=r["cuisine"],
                difficulty=r["difficulty"],
                cook_time=r["cookTime"],
                servings=r["servings"],
                image=r["image"],
                rating=r["rating"],
                ingredients_text=serialize_ingredients(r["ingredients"]),
                description=r["description"],
            )
        )
        session.commit()
        inserted += 1

    logger.info("Seeded %d recipes", inserted)
    return inserted
