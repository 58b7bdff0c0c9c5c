"""
API tests for the place search endpoints.
"""

import threading
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from placesearch.api.main import create_app
from placesearch.core.search_service import SearchService


@pytest.fixture
def client(text_service):
    with TestClient(create_app(service=text_service, warm=False)) as client:
        yield client


def test_health_check_before_and_after_bootstrap(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "starting"
    assert data["search"]["is_ready"] is False

    client.post("/itinerary/search", json={"query": "beach"})

    data = client.get("/health").json()
    assert data["status"] == "healthy"
    assert data["search"]["search_mode"] == "text"
    assert data["version"]


def test_search_places(client):
    response = client.post("/itinerary/search", json={"query": "beach", "limit": 2})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["destination"] == "All India"
    assert data["count"] == 2
    assert [r["name"] for r in data["results"]] == ["Kovalam Beach", "Marina Beach"]
    assert data["results"][0]["relevance_score"] == 4.5
    assert data["results"][0]["state"] == "Kerala"


def test_search_places_with_destination(client):
    response = client.post("/itinerary/search", json={"query": "beach", "destination": "Goa"})

    data = response.json()
    assert data["destination"] == "Goa"
    assert [r["name"] for r in data["results"]] == ["Baga Beach", "Fort Aguada"]


def test_search_places_no_match(client):
    data = client.post("/itinerary/search", json={"query": "zzznomatch"}).json()

    assert data["count"] == 0
    assert data["results"] == []


def test_search_rejects_empty_query(client):
    response = client.post("/itinerary/search", json={"query": "   "})
    assert response.status_code == 422


def test_search_limit_defaults_and_clamps(text_service):
    service = MagicMock(wraps=text_service)
    client = TestClient(create_app(service=service, warm=False))

    client.post("/itinerary/search", json={"query": "beach", "limit": 0})
    assert service.search.call_args[0][1] == 10

    client.post("/itinerary/search", json={"query": "beach", "limit": 500})
    assert service.search.call_args[0][1] == 50


def test_search_status(client):
    response = client.get("/itinerary/status")

    assert response.status_code == 200
    status = response.json()["vector_search"]
    assert status["search_mode"] == "text"
    assert status["model"] == "text-based"
    assert status["index_size"] == 0


def test_search_status_in_vector_mode(vector_service):
    vector_service.initialize()
    client = TestClient(create_app(service=vector_service, warm=False))

    status = client.get("/itinerary/status").json()["vector_search"]

    assert status["is_ready"] is True
    assert status["search_mode"] == "vector"
    assert status["index_size"] == status["total_places_indexed"] == 9
    assert status["embedding_dimension"] == 384


def test_destinations(client):
    response = client.get("/itinerary/destinations")

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 4
    assert [d["name"] for d in data["destinations"]] == ["Delhi", "Goa", "Kerala", "Tamil Nadu"]
    assert "vector_search" in data


def test_trip_places(client):
    response = client.post("/itinerary/places", json={
        "destination": "Kerala",
        "days": 2,
        "budget": "moderate",
        "travel_type": "solo",
        "interests": ["beach"],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["destination"] == "Kerala"
    assert data["destination_type"] == "state"
    assert data["query"] == "Kerala beach solo adventure exploration backpacking"
    assert data["top_k"] == 10
    assert data["used_fallback"] is False
    assert data["count"] == 4
    assert data["places"][0]["name"] == "Kovalam Beach"
    assert data["verified_places"].startswith("VERIFIED PLACES (You must ONLY use these places):\n1. Kovalam Beach")


def test_trip_places_unknown_destination(client):
    response = client.post("/itinerary/places", json={
        "destination": "Atlantis",
        "days": 3,
        "budget": "low",
        "travel_type": "family",
    })

    assert response.status_code == 404
    assert "Atlantis" in response.json()["detail"]


@pytest.mark.parametrize("days", [0, 31])
def test_trip_places_rejects_days_out_of_range(client, days):
    response = client.post("/itinerary/places", json={
        "destination": "Kerala",
        "days": days,
        "budget": "low",
        "travel_type": "family",
    })

    assert response.status_code == 422


def test_unhandled_error_returns_500():
    service = MagicMock(spec=SearchService)
    service.search.side_effect = RuntimeError("boom")
    client = TestClient(create_app(service=service, warm=False), raise_server_exceptions=False)

    response = client.post("/itinerary/search", json={"query": "beach"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"


def test_startup_warms_service_in_background(sample_dataset):
    service = SearchService(dataset=sample_dataset, vector_enabled=False)
    warmed = threading.Event()
    initialize = service.initialize

    def initialize_and_signal():
        initialize()
        warmed.set()

    service.initialize = initialize_and_signal

    with TestClient(create_app(service=service, warm=True)):
        assert warmed.wait(timeout=5)

    assert service.is_ready()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
