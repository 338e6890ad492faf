from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from masar.api.v1.sessions import get_service
from masar.main import app
from masar.services.geocoding import GeocodeResult
from masar.services.planner_service import PlannerService
from masar.services.repository import SessionRepository


async def _stub_geocoder(text):
    if text == "Giza Pyramids":
        return GeocodeResult(29.9792, 31.1342, 0.7)
    return GeocodeResult(None, None, 0.0, message="No geocoding candidates")


async def _stub_reverse_geocoder(_lat, _lon):
    return None


async def _stub_link_resolver(_url):
    return None


@pytest.fixture
def client():
    service = PlannerService(
        SessionRepository(),
        geocoder=_stub_geocoder,
        reverse_geocoder=_stub_reverse_geocoder,
        link_resolver=_stub_link_resolver,
    )
    app.dependency_overrides[get_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_service, None)


def _create_session(client) -> str:
    response = client.post("/v1/sessions/")
    assert response.status_code == 201
    return response.json()["session_id"]


def test_session_route_lifecycle(client):
    session_id = _create_session(client)

    response = client.put(
        f"/v1/sessions/{session_id}/origin",
        json={"latitude": 30.0444, "longitude": 31.2357},
    )
    assert response.status_code == 200
    assert response.json()["origin"]["address"] == "Current location (30.0444, 31.2357)"

    stops = [
        {"name": "Pyramids", "method": "address", "address": "Giza Pyramids"},
        {"name": "Museum", "method": "link", "link": "https://maps.google.com/?q=30.0478,31.2336"},
        {"name": "Citadel", "method": "coordinates", "coordinates": "30.0287,31.2599"},
    ]
    ids = []
    for stop in stops:
        response = client.post(f"/v1/sessions/{session_id}/locations", json=stop)
        assert response.status_code == 201, response.text
        ids.append(response.json()["id"])

    response = client.post(f"/v1/sessions/{session_id}/route")
    assert response.status_code == 200
    route = response.json()["route"]
    assert [leg["location"]["name"] for leg in route] == ["Museum", "Citadel", "Pyramids"]

    session = client.get(f"/v1/sessions/{session_id}").json()
    assert session["route"] is not None
    assert len(session["locations"]) == 3

    geojson = client.get(f"/v1/sessions/{session_id}/map").json()
    assert geojson["features"][-1]["properties"]["kind"] == "route"

    response = client.delete(f"/v1/sessions/{session_id}/locations/{ids[0]}")
    assert response.status_code == 204

    session = client.get(f"/v1/sessions/{session_id}").json()
    assert session["route"] is None
    assert len(session["locations"]) == 2


def test_session_errors(client):
    session_id = _create_session(client)

    response = client.post(f"/v1/sessions/{session_id}/route")
    assert response.status_code == 409

    response = client.post(
        f"/v1/sessions/{session_id}/locations",
        json={"name": "Bad", "method": "coordinates", "coordinates": "200,31"},
    )
    assert response.status_code == 422
    assert response.json()["detail"]["text"] == "200,31"

    response = client.post(
        f"/v1/sessions/{session_id}/locations",
        json={"name": "Nowhere", "method": "address", "address": "Atlantis"},
    )
    assert response.status_code == 422

    response = client.post(
        f"/v1/sessions/{session_id}/locations",
        json={"name": "  ", "method": "link", "link": "https://maps.google.com/?q=1,2"},
    )
    assert response.status_code == 422

    response = client.delete(f"/v1/sessions/{session_id}/locations/missing")
    assert response.status_code == 404

    response = client.get("/v1/sessions/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 404
