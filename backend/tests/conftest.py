# tests/conftest.py
from typing import Any, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from catalog.db import get_session, init_db
from catalog.main import app


@pytest.fixture
def engine():
    """
    Fresh in-memory database per test, with tables and the cuisine lookup in place.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine) -> Generator[TestClient, None, None]:
    def _get_session() -> Generator[Session, None, None]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def recipe_payload() -> Dict[str, Any]:
    return {
        "title": "Shakshuka",
        "cuisine": 9,
        "difficulty": "Easy",
        "cookTime": 30,
        "servings": 2,
        "image": "https://example.com/shakshuka.jpg",
        "rating": 4.5,
        "ingredients": ["4 eggs", "crushed tomatoes", "red pepper", "cumin", "salt"],
        "description": "Eggs poached in a spiced tomato and pepper sauce.",
    }


@pytest.fixture
def create_recipe(client: TestClient, recipe_payload: Dict[str, Any]):
    """Create a recipe through the API; keyword overrides replace payload fields."""

    def _create(**overrides: Any) -> Dict[str, Any]:
        resp = client.post("/api/recipes", json={**recipe_payload, **overrides})
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create


class FailingSession(Session):
    """Session whose statements and commits fail like a lost database connection."""

    def exec(self, *args: Any, **kwargs: Any):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    def commit(self) -> None:
        raise OperationalError("COMMIT", {}, Exception("database is locked"))


@pytest.fixture
def failing_client(engine) -> Generator[TestClient, None, None]:
    def _get_session() -> Generator[Session, None, None]:
        with FailingSession(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()
