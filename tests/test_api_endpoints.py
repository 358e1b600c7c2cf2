"""
test_api_endpoints.py
=====================
API test cases for the Telemedicine Booking Service.
Tests cover:
 - Root health check
 - Prompt lookup
 - Chat turns (validation errors, sessions, full booking)
 - Session lifecycle
 - Doctor search and lookup
"""

import datetime
from unittest import mock

import pytest
import requests

from telemed_app.collaborators import PlacesClient
from telemed_app.main import app


def chat(client, message, step, session_id=None):
    body = {"message": message, "currentStep": step}
    if session_id:
        body["sessionId"] = session_id
    return client.post("/api/chat", json=body)


# --------------------------------------------------------------------------
# ROOT / PROMPTS
# --------------------------------------------------------------------------

def test_root_endpoint(client):
    """
    ✅ Test the root health check endpoint.
    Expected: 200 OK and the service name in the message.
    """
    response = client.get("/")
    assert response.status_code == 200
    assert "Telemedicine Booking Service" in response.json()["message"]


def test_get_prompts(client):
    response = client.get("/api/prompts", params={"step": "initial"})
    assert response.status_code == 200
    prompts = response.json()
    assert prompts[0]["step"] == "initial"
    assert "Book an appointment" in prompts[0]["options"]


@pytest.mark.parametrize("params", [{}, {"step": "nowhere"}])
def test_get_prompts_invalid_step(client, params):
    response = client.get("/api/prompts", params=params)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid step parameter"}


# --------------------------------------------------------------------------
# CHAT
# --------------------------------------------------------------------------

@pytest.mark.parametrize("body", [
    {"currentStep": "initial"},
    {"message": "hello"},
    {"message": "   ", "currentStep": "initial"},
])
def test_chat_missing_parameters(client, body):
    response = client.post("/api/chat", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required parameters"}


def test_chat_invalid_step(client):
    response = chat(client, "hello", "billing")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid step parameter"}


def test_chat_unknown_session(client):
    response = chat(client, "hello", "initial", session_id="does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Session not found"}


def test_chat_without_session_stores_nothing(client):
    """
    ✅ Turns sent without a sessionId are answered but never kept.
    Expected: no sessionId in the reply and no growth of the session store.
    """
    before = len(app.state.sessions)
    for _ in range(20):
        response = chat(client, "Jane Doe", "patient-info")
        assert response.status_code == 200
        data = response.json()
        assert data["nextStep"] == "symptoms-selection"
        assert data["appointment"]["patientName"] == "Jane Doe"
        assert "sessionId" not in data
    assert len(app.state.sessions) == before


def test_chat_without_session_accepts_any_doctor(client):
    data = chat(client, "Dr. Lisa Patel", "doctor").json()
    assert data["nextStep"] == "date"
    assert data["appointment"]["doctorName"] == "Dr. Lisa Patel"


def test_chat_invalid_input_reprompts(client):
    data = chat(client, "12345", "contact-info").json()
    assert data["nextStep"] == "contact-info"
    assert data["message"] == "Please enter a valid phone number (at least 10 digits):"
    assert data["confirmed"] is False


def test_chat_full_booking(client):
    """
    ✅ Drive a whole booking through one session.
    Expected: doctors listed for the chosen specialization and a confirmed appointment.
    """
    appointment_date = datetime.date.today() + datetime.timedelta(days=7)

    session_id = client.post("/api/sessions").json()["sessionId"]
    data = chat(client, "Book an appointment", "initial", session_id).json()
    assert data["nextStep"] == "patient-info"

    turns = [
        ("Jane Doe", "patient-info", "symptoms-selection"),
        ("Headache", "symptoms-selection", "specialization"),
        ("Neurology", "specialization", "doctor"),
        ("Dr. Lisa Patel", "doctor", "date"),
        (appointment_date.isoformat(), "date", "contact-info"),
        ("555-000-1234", "contact-info", "confirmation"),
    ]
    for message, step, expected_next in turns:
        data = chat(client, message, step, session_id).json()
        assert data["nextStep"] == expected_next, data["message"]
        if step == "specialization":
            assert [d["name"] for d in data["doctors"]] == ["Dr. Lisa Patel", "Dr. Robert Wilson"]
            assert all(d["specialization"] == 5 for d in data["doctors"])

    data = chat(client, "x@y.com", "confirmation", session_id).json()
    assert data["confirmed"] is True
    assert data["nextStep"] == "initial"
    assert data["appointment"]["patientName"] == "Jane Doe"
    assert data["appointment"]["doctorName"] == "Dr. Lisa Patel"
    assert data["appointment"]["date"] == appointment_date.isoformat()
    assert "Jane Doe" in data["message"]
    assert "Dr. Lisa Patel" in data["message"]
    assert f"{appointment_date:%B} {appointment_date.day}, {appointment_date.year}" in data["message"]


def test_chat_reset_clears_session(client):
    session_id = client.post("/api/sessions").json()["sessionId"]
    chat(client, "Book an appointment", "initial", session_id).json()
    chat(client, "Jane Doe", "patient-info", session_id)

    data = chat(client, "Start from First", "symptoms-selection", session_id).json()
    assert data["nextStep"] == "initial"
    assert data["appointment"] == {"confirmed": False}

    status = client.get(f"/api/sessions/{session_id}").json()
    assert status["step"] == "initial"
    assert [m["role"] for m in status["messages"]] == ["bot"]


# --------------------------------------------------------------------------
# SESSIONS
# --------------------------------------------------------------------------

def test_session_lifecycle(client):
    created = client.post("/api/sessions")
    assert created.status_code == 200
    data = created.json()
    assert data["step"] == "initial"
    assert data["message"].startswith("Hello!")
    session_id = data["sessionId"]

    status = client.get(f"/api/sessions/{session_id}")
    assert status.status_code == 200
    assert status.json()["messages"][0]["role"] == "bot"

    assert client.delete(f"/api/sessions/{session_id}").status_code == 200
    assert client.get(f"/api/sessions/{session_id}").status_code == 404
    assert client.delete(f"/api/sessions/{session_id}").status_code == 404


# --------------------------------------------------------------------------
# DOCTORS
# --------------------------------------------------------------------------

def test_search_doctors_static(client):
    response = client.post("/api/doctors/search", json={"specialization": "Neurology"})
    assert response.status_code == 200
    names = [d["name"] for d in response.json()["doctors"]]
    assert names == ["Dr. Lisa Patel", "Dr. Robert Wilson"]


@pytest.mark.parametrize("body,error", [
    ({}, "Missing specialization parameter"),
    ({"specialization": "Astrology"}, "Invalid specialization"),
    ({"specialization": "Neurology", "latitude": 95, "longitude": 0}, "Invalid coordinates"),
    ({"specialization": "Neurology", "radius": 0}, "Invalid radius"),
])
def test_search_doctors_invalid(client, body, error):
    response = client.post("/api/doctors/search", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": error}


def test_search_doctors_nearby(client, monkeypatch):
    session = mock.Mock()
    session.get.return_value.json.return_value = {
        "status": "OK",
        "results": [{"place_id": "near-1", "name": "City Neuro", "vicinity": "2 High St",
                     "geometry": {"location": {"lat": 40.7, "lng": -74.0}}}],
    }
    monkeypatch.setattr(app.state, "places_client", PlacesClient("key", session=session))

    response = client.post(
        "/api/doctors/search",
        json={"specialization": "Neurology", "latitude": 40.7, "longitude": -74.0},
    )
    assert response.status_code == 200
    assert [d["placeId"] for d in response.json()["doctors"]] == ["near-1"]


def test_search_doctors_nearby_falls_back_to_static(client, monkeypatch):
    session = mock.Mock()
    session.get.side_effect = requests.ConnectionError("offline")
    monkeypatch.setattr(app.state, "places_client", PlacesClient("key", session=session))

    response = client.post(
        "/api/doctors/search",
        json={"specialization": "Neurology", "latitude": 40.7, "longitude": -74.0},
    )
    assert response.status_code == 200
    assert [d["name"] for d in response.json()["doctors"]] == ["Dr. Lisa Patel", "Dr. Robert Wilson"]


def test_get_doctor_by_place_id(client):
    response = client.get("/api/doctors/place_5")
    assert response.status_code == 200
    assert response.json()["name"] == "Dr. Lisa Patel"


def test_get_doctor_not_found(client):
    response = client.get("/api/doctors/unknown-place")
    assert response.status_code == 404
    assert response.json() == {"error": "Doctor not found"}
