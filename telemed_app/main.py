"""
main.py
========
This is the FastAPI entry point for the Telemedicine Booking Service.
It:
 - Initializes the database and seeds the reference tables.
 - Loads the read-only reference snapshot used by the booking flow.
 - Exposes REST API endpoints for prompts, chat turns, sessions and doctors.
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .collaborators import (
    PromptClient, PlacesClient, with_fallback, validate_coordinates, validate_radius,
)
from .config import (
    CORS_ORIGINS, FlowConfig, GOOGLE_PLACES_API_KEY, HTTP_TIMEOUT, LOG_LEVEL, PROMPT_SERVICE_URL,
)
from .db import init_db, get_db, seed_reference_data, SessionLocal
from .models import Base, Doctor, Prompt
from .reference import load_reference_data, doctor_info
from .schemas import (
    ChatRequest, ChatResponse, DoctorSearchRequest, PromptResponse, SessionResponse, SessionStatusResponse,
)
from .sessions import SessionStore
from .steps import Step, parse_step

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class BookingAPIError(Exception):
    """Lookup or request error answered as {"error": ...} with a status code."""

    def __init__(self, status_code: int, error: str):
        super().__init__(error)
        self.status_code = status_code
        self.error = error


# ---------------------------------------------------------------------------
# APP INITIALIZATION
# ---------------------------------------------------------------------------

app = FastAPI(title="Telemedicine Booking Service", version="1.0")

# Allow the chat frontend to communicate
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.flow = FlowConfig.from_env()
app.state.sessions = SessionStore()
app.state.prompt_client = PromptClient(PROMPT_SERVICE_URL, timeout=HTTP_TIMEOUT)
app.state.places_client = PlacesClient(GOOGLE_PLACES_API_KEY, timeout=HTTP_TIMEOUT)
app.state.reference = None


@app.exception_handler(BookingAPIError)
async def booking_error_handler(request: Request, exc: BookingAPIError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.error})


# ---------------------------------------------------------------------------
# APP STARTUP EVENT
# ---------------------------------------------------------------------------
@app.on_event("startup")
async def startup_event():
    """
    Called when FastAPI starts.
    Creates the tables, seeds reference data and snapshots it for the flow.
    """
    logger.info("🚀 Starting Telemedicine Booking Service...")
    init_db(Base)

    db = SessionLocal()
    try:
        seed_reference_data(db)
        app.state.reference = load_reference_data(db)
    finally:
        db.close()

    reference = app.state.reference
    logger.info(
        f"📚 Reference data loaded: {len(reference.symptoms)} symptoms, "
        f"{len(reference.specializations)} specializations, {len(reference.doctors)} doctors"
    )
    logger.info(
        f"⚙️ Flow: extended={app.state.flow.extended_flow}, "
        f"loop_after_confirmation={app.state.flow.loop_after_confirmation}"
    )


def get_reference(request: Request):
    reference = request.app.state.reference
    if reference is None:
        raise BookingAPIError(503, "Reference data not loaded")
    return reference


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


# ---------------------------------------------------------------------------
# PROMPTS
# ---------------------------------------------------------------------------

@app.get("/api/prompts", response_model=List[PromptResponse])
def api_get_prompts(step: Optional[str] = None, db=Depends(get_db)):
    """
    Opening prompt(s) for a step.
    400 when the step is missing or unknown.
    """
    if parse_step(step) is None:
        raise BookingAPIError(400, "Invalid step parameter")

    prompts = db.query(Prompt).filter(Prompt.step == step).order_by(Prompt.id).all()
    if not prompts:
        raise BookingAPIError(400, "Invalid step parameter")
    return [
        {"id": p.id, "step": p.step, "message": p.message, "options": list(p.options or [])}
        for p in prompts
    ]


# ---------------------------------------------------------------------------
# CHAT
# ---------------------------------------------------------------------------

@app.post("/api/chat", response_model=ChatResponse, response_model_exclude_none=True)
def api_chat(
    req: ChatRequest,
    request: Request,
    reference=Depends(get_reference),
    sessions: SessionStore = Depends(get_sessions),
):
    """
    Process one chat message.

    - Without a sessionId the turn runs on a throwaway state at `currentStep`;
      nothing is stored and no sessionId is returned.
    - With a sessionId the stored session state is authoritative.
    - Returns the bot reply, options, next step and the booking so far.
    """
    if not req.message or not req.message.strip() or not req.currentStep:
        raise BookingAPIError(400, "Missing required parameters")

    step = parse_step(req.currentStep)
    if step is None:
        raise BookingAPIError(400, "Invalid step parameter")

    if req.sessionId:
        session = sessions.get(req.sessionId)
        if session is None:
            raise BookingAPIError(404, "Session not found")
        if session.state.step != step:
            logger.debug(f"Client step {step.value} differs from session step {session.state.step.value}")
    else:
        session = sessions.create(step, register=False)

    result = sessions.run_turn(session, req.message, reference, request.app.state.flow)

    booking = result.booking
    response = {
        "message": result.message,
        "options": result.options,
        "nextStep": result.next_step.value,
        "sessionId": session.id if req.sessionId else None,
        "appointment": booking.to_dict(),
        "confirmed": booking.confirmed,
    }
    if result.doctors:
        response["doctors"] = [d.to_dict() for d in result.doctors]
    return response


# ---------------------------------------------------------------------------
# SESSIONS
# ---------------------------------------------------------------------------

@app.post("/api/sessions", response_model=SessionResponse)
def api_create_session(request: Request, sessions: SessionStore = Depends(get_sessions)):
    """Open a session on the initial step with its opening prompt."""
    session = sessions.create(Step.initial)
    prompt = request.app.state.prompt_client.fetch_prompts(Step.initial.value)[0]
    session.add_message("bot", prompt["message"], prompt.get("options"))
    return {
        "sessionId": session.id,
        "step": session.state.step.value,
        "message": prompt["message"],
        "options": list(prompt.get("options") or []),
    }


@app.get("/api/sessions/{session_id}", response_model=SessionStatusResponse)
def api_get_session(session_id: str, sessions: SessionStore = Depends(get_sessions)):
    session = sessions.get(session_id)
    if session is None:
        raise BookingAPIError(404, "Session not found")
    return {
        "sessionId": session.id,
        "step": session.state.step.value,
        "appointment": session.state.appointment.to_dict(),
        "messages": list(session.messages),
        "createdAt": session.created_at,
        "updatedAt": session.updated_at,
    }


@app.delete("/api/sessions/{session_id}")
def api_delete_session(session_id: str, sessions: SessionStore = Depends(get_sessions)):
    if not sessions.delete(session_id):
        raise BookingAPIError(404, "Session not found")
    return {"message": "Session deleted successfully"}


# ---------------------------------------------------------------------------
# DOCTORS
# ---------------------------------------------------------------------------

@app.post("/api/doctors/search")
def api_search_doctors(req: DoctorSearchRequest, request: Request, reference=Depends(get_reference)):
    """
    Doctors for a specialization name.
    With coordinates and a configured Places key, nearby practitioners are
    looked up first and the static table is the fallback.
    """
    if not req.specialization:
        raise BookingAPIError(400, "Missing specialization parameter")

    specialization = reference.specialization_by_name(req.specialization)
    if specialization is None:
        raise BookingAPIError(400, "Invalid specialization")

    has_location = req.latitude is not None and req.longitude is not None
    if has_location and not validate_coordinates(req.latitude, req.longitude):
        raise BookingAPIError(400, "Invalid coordinates")
    if not validate_radius(req.radius):
        raise BookingAPIError(400, "Invalid radius")

    static_doctors = [d.to_dict() for d in reference.doctors_for(specialization.id)]

    places = request.app.state.places_client
    if not (has_location and places.enabled):
        return {"doctors": static_doctors}

    doctors = with_fallback(
        lambda: places.search_nearby(specialization.name, req.latitude, req.longitude, req.radius),
        lambda: static_doctors,
        label=f"Nearby search for {specialization.name}",
    )
    return {"doctors": doctors}


@app.get("/api/doctors/{place_id}")
def api_get_doctor(place_id: str, db=Depends(get_db)):
    """Get a doctor's details by practice place id."""
    doctor = db.query(Doctor).filter(Doctor.place_id == place_id).first()
    if not doctor:
        raise BookingAPIError(404, "Doctor not found")
    return doctor_info(doctor).to_dict()


# ---------------------------------------------------------------------------
# ROOT ENDPOINT
# ---------------------------------------------------------------------------

@app.get("/")
def root():
    """Basic health check endpoint."""
    return {
        "message": "Telemedicine Booking Service is running!",
        "activeSessions": len(app.state.sessions),
    }
