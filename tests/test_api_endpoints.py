"""Tests for REST endpoints."""

from uuid import uuid4

import httpx
import pytest
from fastapi.testclient import TestClient

from nutritalk.api.app import create_app
from tests.conftest import auth_header, off_product

DAY = "2024-03-14"


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container))


def _register(client: TestClient, email: str = "alice@example.com") -> dict:
    response = client.post(
        "/register", json={"email": email, "password": "pw", "name": "Alice"}
    )
    assert response.status_code == 200
    return response.json()


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_register_and_login(client: TestClient) -> None:
    session = _register(client)

    login = client.post(
        "/login", json={"email": "alice@example.com", "password": "pw"}
    )

    assert login.status_code == 200
    assert login.json()["userId"] == session["userId"]
    assert session["token"]


def test_duplicate_registration_rejected(client: TestClient) -> None:
    _register(client)

    response = client.post(
        "/register",
        json={"email": "alice@example.com", "password": "x", "name": "Other"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_wrong_password_rejected(client: TestClient) -> None:
    _register(client)

    response = client.post(
        "/login", json={"email": "alice@example.com", "password": "nope"}
    )

    assert response.status_code == 401


def test_tracker_routes_require_token(client: TestClient) -> None:
    session = _register(client)
    other = _register(client, "bob@example.com")
    user_id = session["userId"]

    assert client.get(f"/profile/{user_id}").status_code == 401
    assert (
        client.get(f"/profile/{user_id}", headers=auth_header("garbage")).status_code
        == 401
    )
    assert (
        client.get(
            f"/profile/{user_id}", headers=auth_header(other["token"])
        ).status_code
        == 403
    )


def test_profile_get_and_update(client: TestClient) -> None:
    session = _register(client)
    headers = auth_header(session["token"])
    url = f"/profile/{session['userId']}"

    profile = client.get(url, headers=headers).json()
    updated = client.put(
        url, headers=headers, json={"weight": 80, "activityLevel": "élevée"}
    ).json()

    assert profile["dailyCalories"] == 2556
    assert profile["macroRatio"] == {"protein": 25, "carbs": 50, "fat": 25}
    assert updated["weight"] == 80
    assert updated["activityLevel"] == "élevée"
    assert updated["dailyCalories"] == round((800 + 1093.75 - 150 + 5) * 1.725)


def test_log_lifecycle(client: TestClient) -> None:
    session = _register(client)
    headers = auth_header(session["token"])
    base = f"/logs/{session['userId']}/{DAY}"

    empty = client.get(base, headers=headers).json()
    added = client.post(
        f"{base}/entries",
        headers=headers,
        json=[
            {
                "id": "rice",
                "name": "Riz blanc cuit",
                "quantity": 150,
                "calories": 195,
                "protein": 4.05,
                "carbs": 42,
                "fat": 0.45,
                "category": "Féculents",
                "meal": "déjeuner",
            },
            {"name": "Pomme", "calories": 52, "meal": "collation"},
        ],
    ).json()
    water = client.post(f"{base}/water", headers=headers, json={"amount": 500})
    steps = client.put(f"{base}/steps", headers=headers, json={"steps": 7500})
    removed = client.delete(f"{base}/entries/rice", headers=headers).json()

    assert empty["entries"] == []
    assert empty["targetCalories"] == 2556
    assert added["totalCalories"] == pytest.approx(247)
    assert added["entries"][1]["id"]
    assert water.json()["water"] == 500
    assert steps.json()["steps"] == 7500
    assert removed["totalCalories"] == pytest.approx(52)
    assert [e["name"] for e in removed["entries"]] == ["Pomme"]


def test_save_log_recomputes_totals(client: TestClient) -> None:
    session = _register(client)
    headers = auth_header(session["token"])
    url = f"/logs/{session['userId']}/{DAY}"

    response = client.post(
        url,
        headers=headers,
        json={
            "date": DAY,
            "entries": [{"name": "Saumon", "calories": 208, "meal": "dîner"}],
            "totalCalories": 5000,
            "water": 1000,
        },
    )

    assert response.status_code == 200
    assert response.json()["totalCalories"] == 208
    assert client.get(url, headers=headers).json()["water"] == 1000


def test_save_log_with_mismatched_date_rejected(client: TestClient) -> None:
    session = _register(client)

    response = client.post(
        f"/logs/{session['userId']}/{DAY}",
        headers=auth_header(session["token"]),
        json={"date": "2024-03-15"},
    )

    assert response.status_code == 400


def test_weight_updates_history(client: TestClient) -> None:
    session = _register(client)
    headers = auth_header(session["token"])
    user_id = session["userId"]

    client.put(f"/logs/{user_id}/{DAY}/weight", headers=headers, json={"weight": 69.5})
    client.post(
        f"/weights/{user_id}",
        headers=headers,
        json=[
            {"date": "2024-03-10", "weight": 70.2},
            {"date": DAY, "weight": 69.4},
            {"date": DAY, "weight": 69.3},
        ],
    )
    history = client.get(f"/weights/{user_id}", headers=headers).json()

    assert history == [
        {"date": "2024-03-10", "weight": 70.2},
        {"date": DAY, "weight": 69.3},
    ]


def test_export_and_import_csv(client: TestClient) -> None:
    session = _register(client)
    headers = auth_header(session["token"])
    base = f"/logs/{session['userId']}/{DAY}"
    csv_body = "Date,Meal,Food,Quantity,Unit,Calories,Protein,Carbs,Fat\n" + (
        f"{DAY},dîner,Saumon,120,g,250,26.4,0,15.6\n"
    )

    imported = client.post(
        f"{base}/import",
        headers={**headers, "Content-Type": "text/csv"},
        content=csv_body.encode("utf-8"),
    )
    exported = client.get(f"{base}/export", headers=headers)

    assert imported.json()["totalCalories"] == 250
    assert exported.headers["content-type"].startswith("text/csv")
    assert exported.text.splitlines()[1] == f"{DAY},dîner,Saumon,120,g,250,26.4,0,15.6"


def test_sync_returns_everything(client: TestClient) -> None:
    session = _register(client)
    headers = auth_header(session["token"])
    user_id = session["userId"]
    client.post(f"/logs/{user_id}/{DAY}/water", headers=headers, json={"amount": 250})

    snapshot = client.get(f"/sync/{user_id}", headers=headers).json()

    assert snapshot["profile"]["userId"] == user_id
    assert [log["date"] for log in snapshot["logs"]] == [DAY]
    assert snapshot["weights"] == []


def test_missing_profile_is_404(client: TestClient, container) -> None:
    user_id = uuid4()
    token = container.account_service.tokens.issue(user_id)

    response = client.get(f"/profile/{user_id}", headers=auth_header(token))

    assert response.status_code == 404


def test_assistant_analyze(client: TestClient) -> None:
    response = client.post(
        "/assistant/analyze", json={"text": "Ce matin 2 oeufs et 150g de pain"}
    )

    data = response.json()
    assert response.status_code == 200
    assert [s["name"] for s in data["suggestions"]] == ["Œufs", "Pain complet"]
    assert data["suggestions"][0]["meal"] == "petit-déjeuner"
    assert data["suggestions"][1]["calories"] == pytest.approx(370.5)
    assert "identifié 2 aliment(s)" in data["reply"]
    assert "**Pain complet** (150g)" in data["reply"]
    assert data["recipe"] is None


def test_assistant_analyze_without_match(client: TestClient) -> None:
    data = client.post("/assistant/analyze", json={"text": "xyz qwerty"}).json()

    assert data["suggestions"] == []
    assert data["reply"].startswith("Je n'ai pas pu identifier")


def test_assistant_analyze_extracts_recipe(client: TestClient) -> None:
    data = client.post(
        "/assistant/analyze",
        json={"text": "Recette de riz au lait: ingrédients: riz, lait et sucre."},
    ).json()

    assert data["recipe"]["name"] == "riz au lait"
    assert data["recipe"]["ingredients"] == ["riz", "lait", "sucre"]
    assert data["suggestions"][0]["name"] == "Riz blanc cuit"


def test_assistant_analyze_rejects_empty_text(client: TestClient) -> None:
    assert client.post("/assistant/analyze", json={"text": ""}).status_code == 422


def test_assistant_parse(client: TestClient) -> None:
    data = client.post("/assistant/parse", json={"text": "un yaourt"}).json()

    assert data["enabled"] is True
    assert data["foods"][0]["name"] == "yaourt"


def test_food_search_and_barcode(client: TestClient, off_client) -> None:
    off_client.default_results = [off_product()]
    off_client.products["3017620422003"] = off_product()

    search = client.get("/foods/search", params={"q": "nutella"})
    product = client.get("/foods/barcode/3017620422003")
    missing = client.get("/foods/barcode/000")

    assert search.json()[0]["servingSize"] == "15 g"
    assert product.json()["calories"] == 539
    assert missing.status_code == 404


def test_food_lookups_degrade_when_open_food_facts_is_down(
    client: TestClient, off_client
) -> None:
    off_client.error = httpx.ConnectError("offline")

    search = client.get("/foods/search", params={"q": "nutella"})
    product = client.get("/foods/barcode/3017620422003")
    analyze = client.post("/assistant/analyze", json={"text": "xyz qwerty"})

    assert search.status_code == 200
    assert search.json() == []
    assert product.status_code == 404
    assert analyze.status_code == 200
    assert analyze.json()["suggestions"] == []
