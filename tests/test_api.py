"""API-level tests for the Flask app."""

from datetime import datetime, timedelta, timezone

import pytest

from app import app


@pytest.fixture(autouse=True)
def env_setup(monkeypatch):
    monkeypatch.setenv("BAC_MAX_DRINKS", "5")
    yield


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def body(drinks=None, weight_kg=60, sex="male", observed_at="2024-06-01T22:00:00Z"):
    return {
        "profile": {"weight_kg": weight_kg, "sex": sex},
        "drinks": drinks if drinks is not None else [],
        "observed_at": observed_at,
    }


def test_healthz(client):
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.get_json() == {"ok": True}


def test_beverage_types(client):
    res = client.get("/api/beverage-types")
    assert res.status_code == 200
    items = res.get_json()["items"]
    assert {"key": "beer", "name": "Beer (5%)", "abv": 5.0} in items
    assert len(items) == 7


def test_bac_two_drinks(client):
    drinks = [
        {"volume_ml": 500, "type": "beer", "occurred_at": "2024-06-01T22:00:00Z"},
        {"volume_ml": 500, "type": "beer", "occurred_at": "2024-06-01T20:00:00+00:00"},
        {"volume_ml": None, "type": None, "occurred_at": "2024-06-01T21:00:00Z"},
    ]
    res = client.post("/api/bac", json=body(drinks))
    assert res.status_code == 200
    data = res.get_json()
    assert data["bac"] == pytest.approx(0.0666, abs=1e-4)
    assert data["status"] == "moderate"
    assert data["description"] == "Reduced attention"
    assert data["drink_count"] == 3
    assert data["hours_until_sober"] > 0


def test_bac_empty_history(client):
    res = client.post("/api/bac", json=body())
    assert res.status_code == 200
    data = res.get_json()
    assert data["bac"] == 0
    assert data["status"] == "normal"
    assert data["hours_until_sober"] == 0


def test_bac_missing_weight_is_zero(client):
    drinks = [{"volume_ml": 500, "type": "wine", "occurred_at": "2024-06-01T22:00:00"}]
    res = client.post("/api/bac", json=body(drinks, weight_kg=None, sex=None))
    assert res.status_code == 200
    assert res.get_json()["bac"] == 0


def test_bac_rejects_bad_input(client):
    assert client.post("/api/bac", data="nope", content_type="text/plain").status_code == 400
    assert client.post("/api/bac", json={"drinks": []}).status_code == 400

    res = client.post("/api/bac", json=body([{"volume_ml": 100, "type": "beer", "occurred_at": "yesterday"}]))
    assert res.status_code == 400
    assert "drinks[0].occurred_at" in res.get_json()["error"]

    res = client.post("/api/bac", json=body([{"volume_ml": "lots", "type": "beer", "occurred_at": "2024-06-01T22:00:00Z"}]))
    assert res.status_code == 400

    res = client.post("/api/bac", json={"profile": {"weight_kg": 60}, "drinks": {"a": 1}})
    assert res.status_code == 400


def test_bac_drink_cap_from_env(client):
    drink = {"volume_ml": 100, "type": "beer", "occurred_at": "2024-06-01T22:00:00Z"}
    res = client.post("/api/bac", json=body([drink] * 6))
    assert res.status_code == 400
    assert "At most 5" in res.get_json()["error"]


def test_curve(client):
    drinks = [{"volume_ml": 500, "type": "beer", "occurred_at": "2024-06-01T21:00:00Z"}]
    payload = body(drinks)
    payload["step_hours"] = 0.5
    res = client.post("/api/curve", json=payload)
    assert res.status_code == 200
    data = res.get_json()
    assert data["step_hours"] == 0.5
    points = data["points"]
    assert points[0]["t"] == "2024-06-01T21:00:00+00:00"
    assert points[0]["bac"] == pytest.approx(0.0483, abs=1e-4)
    assert all(a["bac"] >= b["bac"] for a, b in zip(points, points[1:]))


def test_curve_clamps_step_and_window(client):
    drinks = [{"volume_ml": 500, "type": "whiskey", "occurred_at": "2024-06-01T21:00:00Z"}]
    payload = body(drinks)
    payload["step_hours"] = 0
    payload["max_hours"] = 10_000
    res = client.post("/api/curve", json=payload)
    assert res.status_code == 200
    data = res.get_json()
    assert data["step_hours"] == 0.05
    assert data["max_hours"] == 48.0
    last = datetime.fromisoformat(data["points"][-1]["t"])
    assert last <= datetime(2024, 6, 1, 21, tzinfo=timezone.utc) + timedelta(hours=48)


def test_curve_empty_history(client):
    res = client.post("/api/curve", json=body())
    assert res.status_code == 200
    assert res.get_json()["points"] == []


def test_curve_future_drink_starts_at_drink(client):
    drinks = [{"volume_ml": 500, "type": "beer", "occurred_at": "2024-06-01T23:00:00Z"}]
    res = client.post("/api/curve", json=body(drinks))
    points = res.get_json()["points"]
    assert points[0]["t"] == "2024-06-01T23:00:00+00:00"
    assert points[0]["bac"] == pytest.approx(0.0483, abs=1e-4)


def test_bac_observed_at_defaults_to_now(client):
    before = datetime.now(timezone.utc)
    payload = body()
    del payload["observed_at"]
    res = client.post("/api/bac", json=payload)
    assert res.status_code == 200
    observed = datetime.fromisoformat(res.get_json()["observed_at"])
    assert before <= observed <= datetime.now(timezone.utc)


def test_bac_tiny_weight_and_huge_volume(client):
    drinks = [{"volume_ml": 500, "type": "beer", "occurred_at": "2024-06-01T22:00:00Z"}]
    res = client.post("/api/bac", json=body(drinks, weight_kg=1e-9))
    assert res.status_code == 200
    data = res.get_json()
    assert data["status"] == "severe"
    assert data["hours_until_sober"] > 1e9

    drinks = [{"volume_ml": 1e300, "type": "beer", "occurred_at": "2024-06-01T20:00:00Z"}]
    res = client.post("/api/bac", json=body(drinks))
    assert res.status_code == 200
    assert res.get_json()["status"] == "severe"


@pytest.mark.parametrize("raw", [
    '{"profile": {"weight_kg": NaN}, "drinks": []}',
    '{"profile": {"weight_kg": Infinity}, "drinks": []}',
    '{"profile": {"weight_kg": 60}, "drinks": [{"volume_ml": -Infinity, "occurred_at": "2024-06-01T22:00:00Z"}]}',
    '{"profile": {"weight_kg": 60}, "drinks": [{"volume_ml": 1' + "0" * 400 + ', "occurred_at": "2024-06-01T22:00:00Z"}]}',
])
def test_bac_rejects_non_finite_numbers(client, raw):
    res = client.post("/api/bac", data=raw, content_type="application/json")
    assert res.status_code == 400
    assert "number" in res.get_json()["error"]


def test_curve_ignores_non_finite_step(client):
    raw = (
        '{"profile": {"weight_kg": 60, "sex": "male"}, "observed_at": "2024-06-01T22:00:00Z", '
        '"step_hours": NaN, "max_hours": Infinity, "drinks": [{"volume_ml": 500, "type": "beer", '
        '"occurred_at": "2024-06-01T21:00:00Z"}]}'
    )
    res = client.post("/api/curve", data=raw, content_type="application/json")
    assert res.status_code == 200
    data = res.get_json()
    assert data["step_hours"] == 0.25
    assert data["max_hours"] == 12.0
    assert len(data["points"]) > 1
