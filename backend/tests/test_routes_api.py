from __future__ import annotations

from fastapi.testclient import TestClient

from masar.main import app


client = TestClient(app)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_route_endpoint_orders_stops_nearest_first():
    payload = {
        "origin": {"label": "Current Location", "latitude": 0.0, "longitude": 0.0},
        "stops": [
            {"label": "Far", "latitude": 0.0, "longitude": 2.0},
            {"label": "Near", "latitude": 0.0, "longitude": 1.0},
            {"latitude": 0.0, "longitude": -1.0},
        ],
    }

    response = client.post("/v1/routes/", json=payload)
    assert response.status_code == 200

    data = response.json()
    assert [leg["location"]["name"] for leg in data["route"]] == [
        "Near",
        "Far",
        "Stop 3",
    ]
    assert data["route"][0]["from_latitude"] == 0.0
    assert abs(data["total_distance_km"] - 111.19 * 5) < 2
    assert data["total_distance_label"].endswith("km")
    assert data["links"]["google_directions"].startswith(
        "https://www.google.com/maps/dir/?api=1&origin=0.0,0.0"
    )
    assert len(data["links"]["stops"]) == 3


def test_route_endpoint_rejects_out_of_range_stop():
    payload = {
        "origin": {"latitude": 0.0, "longitude": 0.0},
        "stops": [{"latitude": 120.0, "longitude": 0.0}],
    }

    response = client.post("/v1/routes/", json=payload)
    assert response.status_code == 422


def test_parse_endpoint():
    response = client.post(
        "/v1/locations/parse",
        json={"text": "https://www.google.com/maps/@30.0444,31.2357,15z", "kind": "link"},
    )
    assert response.status_code == 200
    assert response.json() == {
        "latitude": 30.0444,
        "longitude": 31.2357,
        "matched": "link",
    }

    response = client.post("/v1/locations/parse", json={"text": "30.0444 31.2357"})
    assert response.json()["matched"] == "coordinates"


def test_parse_endpoint_echoes_text_on_failure():
    response = client.post(
        "/v1/locations/parse", json={"text": "200,31", "kind": "coordinates"}
    )
    assert response.status_code == 422
    assert response.json()["detail"]["text"] == "200,31"


def test_route_endpoint_accepts_empty_stop_list():
    response = client.post(
        "/v1/routes/", json={"origin": {"latitude": 0.0, "longitude": 0.0}, "stops": []}
    )
    assert response.status_code == 200

    data = response.json()
    assert data["route"] == []
    assert data["total_distance_km"] == 0.0
    assert data["total_eta_minutes"] == 0
    assert data["total_distance_label"] == "0 m"
    assert data["links"]["stops"] == []
    assert "destination=0.0,0.0" in data["links"]["google_directions"]


def test_route_endpoint_handles_antipodal_stop():
    payload = {
        "origin": {"latitude": 0.08, "longitude": 0.0},
        "stops": [{"label": "Far side", "latitude": -0.08, "longitude": 180.0}],
    }

    response = client.post("/v1/routes/", json=payload)
    assert response.status_code == 200
    assert abs(response.json()["total_distance_km"] - 20015.09) < 1
