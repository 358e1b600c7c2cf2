"""
collaborators.py
================
Clients for the external services the booking service talks to:
 - a remote prompt store (optional)
 - Google Places nearby search for doctors (optional)

Both are best-effort. `with_fallback` runs the remote call once and, if it
fails, substitutes the static data instead. There are no retries.
"""

import logging
from typing import Callable, Dict, List, Optional, TypeVar

import requests

from .medical_data import PROMPTS, START_OVER_OPTION

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Failures that mean "use the static data instead"
FALLBACK_ERRORS = (requests.RequestException, ValueError, LookupError)

PLACES_NEARBY_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
MAX_RADIUS_METERS = 50000


def with_fallback(primary: Callable[[], T], fallback: Callable[[], T], label: str) -> T:
    """
    Call `primary`; on a collaborator failure log it and return `fallback()`.
    Programming errors (TypeError, AttributeError, ...) still propagate.
    """
    try:
        return primary()
    except FALLBACK_ERRORS as e:
        logger.warning(f"⚠️ {label} failed, using static data: {e}")
        return fallback()


# ---------------------------------------------------------------------------
# PROMPTS
# ---------------------------------------------------------------------------

def static_prompts(step: str) -> List[Dict]:
    """Built-in prompt for a step, same shape as GET /api/prompts."""
    if step not in PROMPTS:
        return [{"id": "default-1", "step": "default", "message": "How can I help you?",
                 "options": [START_OVER_OPTION]}]
    prompt_id, message, options = PROMPTS[step]
    return [{"id": prompt_id, "step": step, "message": message, "options": list(options)}]


class PromptClient:
    """
    Fetches the opening prompt for a step from a remote prompt store.
    Without a base URL the built-in table is served directly.
    """

    def __init__(self, base_url: str = "", timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _fetch_remote(self, step: str) -> List[Dict]:
        resp = self.session.get(f"{self.base_url}/api/prompts", params={"step": step}, timeout=self.timeout)
        resp.raise_for_status()
        prompts = resp.json()
        if not isinstance(prompts, list) or not all(isinstance(p, dict) and "message" in p for p in prompts):
            raise ValueError(f"Unexpected prompt payload for step {step!r}")
        return prompts

    def fetch_prompts(self, step: str) -> List[Dict]:
        if not self.base_url:
            return static_prompts(step)
        return with_fallback(
            lambda: self._fetch_remote(step),
            lambda: static_prompts(step),
            label=f"Prompt fetch for {step}",
        )


# ---------------------------------------------------------------------------
# DOCTOR LOCATIONS
# ---------------------------------------------------------------------------

def validate_coordinates(latitude: float, longitude: float) -> bool:
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


def validate_radius(radius: int) -> bool:
    return 0 < radius <= MAX_RADIUS_METERS


class PlacesClient:
    """Google Places nearby search for practitioners of a specialization."""

    def __init__(self, api_key: str = "", timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def search_nearby(self, specialization: str, latitude: float, longitude: float, radius: int = 5000) -> List[Dict]:
        """
        Doctors near a location, in the same shape as the static doctor
        records (placeId, name, address, latitude, longitude, rating, ...).

        Raises:
            requests.RequestException: network / HTTP failure
            ValueError: Places API returned an error status
            LookupError: nothing found nearby
        """
        resp = self.session.get(
            PLACES_NEARBY_URL,
            params={
                "location": f"{latitude},{longitude}",
                "radius": radius,
                "type": "doctor",
                "keyword": specialization,
                "key": self.api_key,
            },
            timeout=self.timeout,
        )
        resp.raise_for_status()
        payload = resp.json()

        status = payload.get("status")
        if status not in ("OK", "ZERO_RESULTS"):
            raise ValueError(f"Places API status {status}: {payload.get('error_message', '')}")

        results = payload.get("results", [])
        if not results:
            raise LookupError(f"No {specialization} doctors near {latitude},{longitude}")

        doctors = []
        for place in results:
            location = place.get("geometry", {}).get("location", {})
            doctors.append({
                "placeId": place.get("place_id"),
                "name": place.get("name"),
                "address": place.get("vicinity", ""),
                "latitude": location.get("lat"),
                "longitude": location.get("lng"),
                "rating": place.get("rating", 0),
                "reviewCount": place.get("user_ratings_total", 0),
            })
        logger.info(f"📍 Found {len(doctors)} {specialization} doctors nearby")
        return doctors
