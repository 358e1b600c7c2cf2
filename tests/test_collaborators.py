"""
test_collaborators.py
=====================
Prompt store and Places clients with the HTTP session mocked out.
"""

from unittest import mock

import pytest
import requests

from telemed_app.collaborators import (
    PlacesClient, PromptClient, static_prompts, validate_coordinates, validate_radius, with_fallback,
)
from telemed_app.medical_data import START_OVER_OPTION


def fake_session(payload=None, error=None):
    session = mock.Mock()
    if error is not None:
        session.get.side_effect = error
    else:
        response = mock.Mock()
        response.json.return_value = payload
        response.raise_for_status.return_value = None
        session.get.return_value = response
    return session


# --------------------------------------------------------------------------
# with_fallback
# --------------------------------------------------------------------------

def test_with_fallback_returns_primary():
    assert with_fallback(lambda: "remote", lambda: "static", label="test") == "remote"


@pytest.mark.parametrize("error", [
    requests.ConnectionError("down"), requests.Timeout("slow"), ValueError("bad"), LookupError("none"),
])
def test_with_fallback_uses_fallback_on_collaborator_errors(error):
    def primary():
        raise error

    assert with_fallback(primary, lambda: "static", label="test") == "static"


def test_with_fallback_propagates_programming_errors():
    def primary():
        raise TypeError("bug")

    with pytest.raises(TypeError):
        with_fallback(primary, lambda: "static", label="test")


# --------------------------------------------------------------------------
# PROMPTS
# --------------------------------------------------------------------------

def test_static_prompts_known_step():
    prompts = static_prompts("patient-info")
    assert prompts[0]["message"] == "Please enter your name:"


def test_static_prompts_unknown_step():
    prompts = static_prompts("nowhere")
    assert prompts[0]["step"] == "default"
    assert prompts[0]["options"] == [START_OVER_OPTION]


def test_prompt_client_without_url_serves_static():
    session = fake_session()
    client = PromptClient("", session=session)
    assert client.fetch_prompts("date") == static_prompts("date")
    session.get.assert_not_called()


def test_prompt_client_remote_prompts():
    remote = [{"id": "r1", "step": "initial", "message": "Hi from remote", "options": []}]
    session = fake_session(payload=remote)
    client = PromptClient("http://prompts.local/", timeout=2.0, session=session)

    assert client.fetch_prompts("initial") == remote
    session.get.assert_called_once_with(
        "http://prompts.local/api/prompts", params={"step": "initial"}, timeout=2.0,
    )


def test_prompt_client_falls_back_when_unreachable():
    session = fake_session(error=requests.ConnectionError("refused"))
    client = PromptClient("http://prompts.local", session=session)
    assert client.fetch_prompts("initial") == static_prompts("initial")


def test_prompt_client_falls_back_on_bad_payload():
    session = fake_session(payload={"unexpected": True})
    client = PromptClient("http://prompts.local", session=session)
    assert client.fetch_prompts("initial") == static_prompts("initial")


# --------------------------------------------------------------------------
# PLACES
# --------------------------------------------------------------------------

PLACES_PAYLOAD = {
    "status": "OK",
    "results": [
        {
            "place_id": "abc123",
            "name": "Downtown Neurology Clinic",
            "vicinity": "1 Main St",
            "geometry": {"location": {"lat": 40.7, "lng": -74.0}},
            "rating": 4.6,
            "user_ratings_total": 210,
        }
    ],
}


def test_coordinate_and_radius_checks():
    assert validate_coordinates(40.7, -74.0)
    assert not validate_coordinates(91, 0)
    assert not validate_coordinates(0, -181)
    assert validate_radius(50000)
    assert not validate_radius(0)
    assert not validate_radius(50001)


def test_places_client_disabled_without_key():
    assert not PlacesClient("").enabled
    assert PlacesClient("key").enabled


def test_places_search_maps_results():
    session = fake_session(payload=PLACES_PAYLOAD)
    client = PlacesClient("key", session=session)

    doctors = client.search_nearby("Neurology", 40.7, -74.0, 3000)
    assert doctors == [{
        "placeId": "abc123",
        "name": "Downtown Neurology Clinic",
        "address": "1 Main St",
        "latitude": 40.7,
        "longitude": -74.0,
        "rating": 4.6,
        "reviewCount": 210,
    }]
    params = session.get.call_args.kwargs["params"]
    assert params["keyword"] == "Neurology"
    assert params["radius"] == 3000
    assert params["location"] == "40.7,-74.0"


def test_places_search_no_results():
    session = fake_session(payload={"status": "ZERO_RESULTS", "results": []})
    with pytest.raises(LookupError):
        PlacesClient("key", session=session).search_nearby("Neurology", 40.7, -74.0)


def test_places_search_error_status():
    session = fake_session(payload={"status": "REQUEST_DENIED", "error_message": "bad key"})
    with pytest.raises(ValueError):
        PlacesClient("key", session=session).search_nearby("Neurology", 40.7, -74.0)
