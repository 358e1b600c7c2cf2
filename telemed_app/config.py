"""
config.py
=========
Application settings for the Telemedicine Booking Service.
Values come from environment variables; defaults suit local development.
"""

import os
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# DATABASE / HTTP
# ---------------------------------------------------------------------------

# Reference tables are seeded at startup; an in-memory SQLite DB is enough.
DATABASE_URL = os.getenv("TELEMED_DB", "sqlite://")

# Origins allowed to call the API (frontend dev server by default)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("TELEMED_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("TELEMED_LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------------------------
# COLLABORATORS
# ---------------------------------------------------------------------------

# Remote prompt store. Empty means "serve the built-in prompt table".
PROMPT_SERVICE_URL = os.getenv("TELEMED_PROMPT_SERVICE_URL", "")

# Google Places key for nearby doctor search (optional)
GOOGLE_PLACES_API_KEY = os.getenv("GOOGLE_PLACES_API_KEY", "")


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        logger.warning(f"⚠️ Invalid {name}, using default {default}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("true", "1", "yes")


HTTP_TIMEOUT = _env_float("TELEMED_HTTP_TIMEOUT", 5.0)


# ---------------------------------------------------------------------------
# BOOKING FLOW
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FlowConfig:
    """
    Options for the booking state machine.

    Attributes:
        loop_after_confirmation: start a fresh booking after a confirmed one
            instead of staying on the confirmation step
        extended_flow: ask for consultation type (virtual / in-person) before
            the doctor and for a time slot after the date
    """

    loop_after_confirmation: bool = True
    extended_flow: bool = False

    @staticmethod
    def from_env() -> "FlowConfig":
        return FlowConfig(
            loop_after_confirmation=_env_bool("TELEMED_LOOP_AFTER_CONFIRMATION", True),
            extended_flow=_env_bool("TELEMED_EXTENDED_FLOW", False),
        )
