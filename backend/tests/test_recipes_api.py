# tests/test_recipes_api.py
from fastapi.testclient import TestClient
from sqlalchemy import func
from sqlmodel import Session, select

from catalog.models.db_models import Recipe


def _count_rows(engine) -> int:
    with Session(engine) as session:
        return session.exec(select(func.count()).select_from(Recipe)).one()


def test_create_and_fetch_roundtrip(client: TestClient, recipe_payload):
    resp = client.post("/api/recipes", json=recipe_payload)
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Recipe created successfully"

    created = body["data"]
    assert isinstance(created["id"], int)
    for key, value in recipe_payload.items():
        assert created[key] == value

    get_resp = client.get(f"/api/recipes/{created['id']}")
    assert get_resp.status_code == 200
    assert get_resp.json()["ingredients"] == recipe_payload["ingredients"]


def test_create_lists_every_missing_field(client: TestClient, engine):
    resp = client.post("/api/recipes", json={"title": "Only a title", "servings": None})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Missing required fields"
    assert body["missingFields"] == [
        "cuisine", "difficulty", "cookTime", "servings",
        "image", "rating", "ingredients", "description",
    ]
    assert _count_rows(engine) == 0


def test_create_without_body(client: TestClient):
    resp = client.post("/api/recipes")
    assert resp.status_code == 400
    assert resp.json() == {"message": "The body of the request is missing."}


def test_create_with_unknown_cuisine(client: TestClient, recipe_payload, engine):
    resp = client.post("/api/recipes", json={**recipe_payload, "cuisine": 12})
    assert resp.status_code == 400
    body = resp.json()
    assert len(body["validCuisines"]) == 11
    assert body["validCuisines"]["3"] == "American"
    assert _count_rows(engine) == 0


def test_list_defaults_to_first_page_of_six(client: TestClient, create_recipe):
    for i in range(8):
        create_recipe(title=f"Recipe {i}")

    resp = client.get("/api/recipes")
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalCount"] == 8
    assert [r["title"] for r in body["recipes"]] == [f"Recipe {i}" for i in range(6)]

    second = client.get("/api/recipes", params={"page": 2}).json()
    assert [r["title"] for r in second["recipes"]] == ["Recipe 6", "Recipe 7"]


def test_list_filters_by_cuisine_with_pagination(client: TestClient, create_recipe):
    for i in range(9):
        create_recipe(title=f"American {i}", cuisine=3)
    create_recipe(title="Carbonara", cuisine=1)

    resp = client.get("/api/recipes", params={"page": 1, "limit": 6, "cuisine": 3})
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["recipes"]) == 6
    assert all(r["cuisine"] == 3 for r in body["recipes"])
    assert body["recipes"][0]["title"] == "American 0"
    assert body["totalCount"] == 9


def test_list_filters_combine(client: TestClient, create_recipe):
    create_recipe(title="Egg Fried Rice", difficulty="Easy", cookTime=15,
                  ingredients=["rice", "2 eggs", "soy sauce", "salt"])
    create_recipe(title="Egg Custard", difficulty="Hard", cookTime=60,
                  ingredients=["milk", "eggs", "sugar"])
    create_recipe(title="Salted Caramel", difficulty="Easy", cookTime=15,
                  ingredients=["sugar", "cream", "sea salt"])

    by_ingredients = client.get("/api/recipes", params={"ingredients": "egg,salt"}).json()
    assert [r["title"] for r in by_ingredients["recipes"]] == ["Egg Fried Rice"]

    by_title = client.get("/api/recipes", params={"title": "egg", "difficulty": "Hard"}).json()
    assert [r["title"] for r in by_title["recipes"]] == ["Egg Custard"]

    by_time = client.get("/api/recipes", params={"cookTime": 15}).json()
    assert by_time["totalCount"] == 2

    ignored = client.get("/api/recipes", params={"ingredients": " , ", "colour": "red"}).json()
    assert ignored["totalCount"] == 3


def test_list_rejects_bad_pagination(client: TestClient):
    cases = {
        ("abc", "6"): "Parameter 'page' must be a valid number.",
        ("1.5", "6"): "Parameter 'page' must be an integer.",
        ("0", "6"): "Parameter 'page' must be greater than 0.",
        ("1", "x"): "Parameter 'limit' must be a valid number.",
        ("1", "2.2"): "Parameter 'limit' must be an integer.",
        ("1", "-1"): "Parameter 'limit' must be greater than 0.",
    }
    for (page, limit), message in cases.items():
        resp = client.get("/api/recipes", params={"page": page, "limit": limit})
        assert resp.status_code == 400
        assert resp.json() == {"message": message}


def test_list_rejects_non_numeric_cuisine(client: TestClient):
    resp = client.get("/api/recipes", params={"cuisine": "thai"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Parameter 'cuisine' must be a valid number."


def test_update_changes_only_supplied_fields(client: TestClient, create_recipe, recipe_payload):
    created = create_recipe()

    resp = client.put(f"/api/recipes/{created['id']}", json={"rating": 4.9})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Recipe updated successfully"
    assert body["data"] == {**created, "rating": 4.9}


def test_update_ingredients_and_cook_time(client: TestClient, create_recipe):
    created = create_recipe()

    resp = client.put(
        f"/api/recipes/{created['id']}",
        json={"ingredients": ["rice", "beans"], "cookTime": 12.5},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["ingredients"] == ["rice", "beans"]
    assert data["cookTime"] == 12.5
    assert data["title"] == created["title"]


def test_update_with_no_data(client: TestClient, create_recipe):
    created = create_recipe()

    resp = client.put(f"/api/recipes/{created['id']}", json={"unknown": 1})
    assert resp.status_code == 400
    assert resp.json() == {"message": "There is no data to update."}


def test_update_validation_error_leaves_row_untouched(client: TestClient, create_recipe):
    created = create_recipe()

    resp = client.put(f"/api/recipes/{created['id']}", json={"title": "New", "difficulty": "Extreme"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "'difficulty' must be one of Easy, Medium, Hard."

    assert client.get(f"/api/recipes/{created['id']}").json() == created


def test_update_missing_recipe(client: TestClient):
    resp = client.put("/api/recipes/999", json={"rating": 1})
    assert resp.status_code == 404
    assert resp.json() == {"message": "Recipe with id 999 not found."}


def test_delete_returns_snapshot(client: TestClient, create_recipe, engine):
    created = create_recipe()

    resp = client.delete(f"/api/recipes/{created['id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Recipe deleted successfully"
    assert body["deletedRecipe"] == created

    assert client.get(f"/api/recipes/{created['id']}").status_code == 404
    assert _count_rows(engine) == 0


def test_delete_missing_recipe(client: TestClient, create_recipe, engine):
    create_recipe()

    resp = client.delete("/api/recipes/12345")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Recipe with id 12345 not found."}
    assert _count_rows(engine) == 1


def test_get_missing_recipe(client: TestClient):
    resp = client.get("/api/recipes/7")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Recipe with id 7 not found."}
