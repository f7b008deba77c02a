"""
Filtered, paginated recipe queries.

Optional filters become a list of FilterClause objects. Each clause knows the
column it targets and the single value it binds, so the final statement is
assembled from SQLAlchemy expressions and never from interpolated strings.

Ingredient filtering is substring matching against the serialized ingredient
list, so "egg" also matches "eggplant". That imprecision is accepted.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Union

from sqlalchemy import ColumnElement, and_, func
from sqlmodel import Session, col, select

from catalog.core.errors import InvalidParameter
from catalog.models.db_models import Recipe
from catalog.models.recipes import RecipeFilters
from catalog.services.validation import MAX_SQL_INT, parse_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Equals:
    column: Any
    value: Any

    def expression(self) -> ColumnElement[bool]:
        return self.column == self.value


@dataclass(frozen=True)
class Contains:
    column: Any
    value: str

    @property
    def pattern(self) -> str:
        return f"%{self.value}%"

    def expression(self) -> ColumnElement[bool]:
        return self.column.like(self.pattern)


FilterClause = Union[Equals, Contains]


@dataclass(frozen=True)
class RecipeQuery:
    clauses: List[FilterClause] = field(default_factory=list)
    page: int = 1
    limit: int = 6

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def bound_values(self) -> List[Any]:
        """Values in binding order: one per clause, then limit and offset."""
        values: List[Any] = [
            c.pattern if isinstance(c, Contains) else c.value for c in self.clauses
        ]
        return values + [self.limit, self.offset]

    def where(self) -> ColumnElement[bool] | None:
        if not self.clauses:
            return None
        return and_(*(c.expression() for c in self.clauses))

    def rows_statement(self):
        stmt = select(Recipe)
        predicate = self.where()
        if predicate is not None:
            stmt = stmt.where(predicate)
        return stmt.order_by(col(Recipe.id)).limit(self.limit).offset(self.offset)

    def count_statement(self):
        stmt = select(func.count()).select_from(Recipe)
        predicate = self.where()
        if predicate is not None:
            stmt = stmt.where(predicate)
        return stmt


def _present(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _numeric_filter(name: str, raw: str) -> int | float:
    number = parse_number(raw)
    if number is None or not math.isfinite(number):
        raise InvalidParameter(f"Parameter '{name}' must be a valid number.")
    if number.is_integer() and abs(number) <= MAX_SQL_INT:
        return int(number)
    return number


def split_ingredient_terms(raw: str | None) -> List[str]:
    """'egg, salt,,  ' -> ['egg', 'salt']"""
    if raw is None:
        return []
    return [term.strip() for term in raw.split(",") if term.strip()]


def build_clauses(filters: RecipeFilters) -> List[FilterClause]:
    clauses: List[FilterClause] = []

    title = _present(filters.title)
    if title:
        clauses.append(Contains(col(Recipe.title), title))

    cuisine = _present(filters.cuisine)
    if cuisine:
        clauses.append(Equals(col(Recipe.cuisine), _numeric_filter("cuisine", cuisine)))

    difficulty = _present(filters.difficulty)
    if difficulty:
        clauses.append(Equals(col(Recipe.difficulty), difficulty))

    cook_time = _present(filters.cook_time)
    if cook_time:
        clauses.append(Equals(col(Recipe.cook_time), _numeric_filter("cookTime", cook_time)))

    for term in split_ingredient_terms(filters.ingredients):
        clauses.append(Contains(col(Recipe.ingredients_text), term))

    return clauses


def compose_recipe_query(filters: RecipeFilters, page: int, limit: int) -> RecipeQuery:
    return RecipeQuery(clauses=build_clauses(filters), page=page, limit=limit)


def fetch_recipe_page(session: Session, query: RecipeQuery) -> tuple[Sequence[Recipe], int]:
    """Run the page query and its count query; returns (rows, total matching)."""
    logger.debug("Recipe query with %d clauses, bound values %s", len(query.clauses), query.bound_values())
    rows = session.exec(query.rows_statement()).all()
    total = session.exec(query.count_statement()).one()
    return rows, int(total)
