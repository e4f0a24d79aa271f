"""Tests for the public HTTP API."""

from fastapi.testclient import TestClient

from healmeal.api.app import create_app
from tests.conftest import TODAY


def _client(container) -> TestClient:
    return TestClient(create_app(container))


def _sign_in(client: TestClient, auth_client) -> None:
    auth_client.register("ada@example.com", "secret", "Ada")
    response = client.post(
        "/auth/sign-in", json={"email": "ada@example.com", "password": "secret"}
    )
    assert response.status_code == 200


def _complete_profile(client: TestClient) -> None:
    response = client.put(
        "/profile",
        json={
            "name": "Ada",
            "age": 36,
            "height": 170,
            "weight": 65,
            "gender": "female",
            "conditions": ["diabetes"],
        },
    )
    assert response.status_code == 200


def test_health(container) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_sign_up_and_sign_out(container) -> None:
    client = _client(container)

    response = client.post(
        "/auth/sign-up",
        json={"email": "new@example.com", "password": "pw", "name": "New"},
    )
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "new@example.com"

    assert client.post("/auth/sign-out").status_code == 200
    assert client.get("/profile").status_code == 401


def test_sign_in_with_bad_credentials(container) -> None:
    response = _client(container).post(
        "/auth/sign-in", json={"email": "nobody@example.com", "password": "pw"}
    )

    assert response.status_code == 401


def test_profile_update_and_validation(container, auth_client) -> None:
    client = _client(container)
    _sign_in(client, auth_client)

    _complete_profile(client)
    profile = client.get("/profile").json()["profile"]
    invalid = client.put("/profile", json={"name": "Ada", "age": -3})

    assert profile["bmi"] == 22.5
    assert profile["is_complete"] is True
    assert invalid.status_code == 422


def test_meals_require_complete_profile(container, auth_client) -> None:
    client = _client(container)
    _sign_in(client, auth_client)

    assert client.get("/meals").status_code == 409

    _complete_profile(client)
    response = client.get("/meals")

    assert response.status_code == 200
    assert [meal["id"] for meal in response.json()["meals"]] == ["m3"]


def test_cart_endpoints(container) -> None:
    client = _client(container)

    client.post("/cart/items", json={"meal_id": "m1", "quantity": 2})
    response = client.post("/cart/items", json={"meal_id": "m2"})
    assert response.json()["total_price"] == 30.97
    assert response.json()["items"][0]["name"] == "Anti-Inflammatory Berry Smoothie"

    response = client.patch("/cart/items/m2", json={"quantity": 0})
    assert [item["meal_id"] for item in response.json()["items"]] == ["m1"]

    response = client.delete("/cart/items/m1")
    assert response.json()["items"] == []

    assert client.post("/cart/items", json={"meal_id": "nope"}).status_code == 404


def test_checkout_track_and_deliver(container, auth_client) -> None:
    client = _client(container)
    _sign_in(client, auth_client)
    client.post("/cart/items", json={"meal_id": "m1", "quantity": 2})
    client.post("/cart/items", json={"meal_id": "m2"})

    response = client.post(
        "/checkout", json={"delivery_address": "1 Main St", "payment_method": "card"}
    )
    assert response.status_code == 201
    body = response.json()
    order_id = body["order"]["id"]
    assert body["order"]["total_price"] == 36.96
    assert body["receipt"]["subtotal"] == 30.97
    assert len(body["timeline"]) == 5
    assert client.get("/cart").json()["items"] == []
    assert client.get("/orders").json()["orders"][0]["id"] == order_id

    statuses = [
        client.post(f"/orders/{order_id}/tracking/advance").json()["status"]
        for _ in range(5)
    ]
    assert statuses == [
        "preparing",
        "ready",
        "out_for_delivery",
        "delivered",
        "delivered",
    ]

    day = client.get(f"/tracker/{TODAY.isoformat()}").json()
    assert [entry["meal_type"] for entry in day["log"]["meals"]] == [
        "breakfast",
        "lunch",
        "dinner",
    ]
    assert day["totals"]["calories"] > 0
    notices = client.get("/notifications").json()["notices"]
    titles = [notice["title"] for notice in notices]
    assert "Order delivered!" in titles


def test_checkout_failure_reports_notice(container, auth_client) -> None:
    client = _client(container)
    _sign_in(client, auth_client)
    client.post("/cart/items", json={"meal_id": "m1"})

    response = client.post("/checkout", json={"delivery_address": " "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter a delivery address"
    assert client.get("/cart").json()["total_quantity"] == 1


def test_pause_tracking(container, auth_client) -> None:
    client = _client(container)
    _sign_in(client, auth_client)
    client.post("/cart/items", json={"meal_id": "m1"})
    order_id = client.post(
        "/checkout", json={"delivery_address": "1 Main St"}
    ).json()["order"]["id"]

    paused = client.delete(f"/orders/{order_id}/tracking").json()
    advanced = client.post(f"/orders/{order_id}/tracking/advance").json()

    assert paused["live"] is False
    assert advanced["status"] == "confirmed"


def test_tracker_entries(container, auth_client) -> None:
    client = _client(container)
    _sign_in(client, auth_client)

    created = client.post(
        "/tracker/entries",
        json={"meal_id": "m6", "date": "2026-03-01", "meal_type": "snack"},
    )
    assert created.status_code == 201
    log_id = created.json()["log"]["id"]

    assert client.delete(f"/tracker/{log_id}/entries/m6").status_code == 200
    assert client.get("/tracker/2026-03-01").json()["log"] is None
    assert client.delete(f"/tracker/{log_id}/entries/m6").status_code == 404


def test_user_endpoints_require_sign_in(container) -> None:
    client = _client(container)

    assert client.get("/orders").status_code == 401
    assert client.get("/meals").status_code == 401
    assert client.get("/tracker/2026-03-01").status_code == 401
