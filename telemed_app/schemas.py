"""
schemas.py
==========
Pydantic models used for validating incoming requests and
structuring outgoing API responses.

Field names follow the camelCase wire format the chat frontend uses.
"""

from pydantic import BaseModel
from typing import Optional, List


class ChatRequest(BaseModel):
    """
    One chat turn. Fields are optional so missing values can be answered
    with the service's own 400 error instead of a 422.
    """
    message: Optional[str] = None
    currentStep: Optional[str] = None
    sessionId: Optional[str] = None


class ChatResponse(BaseModel):
    """Bot reply for a chat turn."""
    message: str
    options: List[str] = []
    nextStep: str
    sessionId: Optional[str] = None
    appointment: dict
    confirmed: bool = False
    doctors: Optional[List[dict]] = None


class SessionResponse(BaseModel):
    """A freshly opened chat session with its opening prompt."""
    sessionId: str
    step: str
    message: str
    options: List[str] = []


class SessionStatusResponse(BaseModel):
    """Current step, collected booking fields and history of a session."""
    sessionId: str
    step: str
    appointment: dict
    messages: List[dict]
    createdAt: str
    updatedAt: str


class PromptResponse(BaseModel):
    """Opening bot message for a step."""
    id: str
    step: str
    message: str
    options: List[str] = []


class DoctorSearchRequest(BaseModel):
    """Request body for searching doctors by specialization and location."""
    specialization: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: int = 5000
