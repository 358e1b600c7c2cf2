"""
validation.py
=============
Per-step input validation for the booking conversation.

`validate(step, raw_input, ...)` never raises for bad user input: it returns
a ValidationResult whose `error` is the re-prompt shown to the patient.
It only raises MissingBookingInfo when an earlier step's data is missing.
"""

import calendar
import datetime
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .reference import ReferenceData, DoctorInfo, SpecializationInfo
from .state import BookingState, MissingBookingInfo
from .steps import Step

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# PATTERNS
# ---------------------------------------------------------------------------

NAME_PATTERN = re.compile(r"^[a-zA-Z\s]{2,50}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")
PHONE_PATTERN = re.compile(r"^[\d\s\-()]{10,}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

INITIAL_CHOICES = ("book an appointment", "find a doctor", "get medical advice")
CONSULTATION_TYPES = {"virtual": "virtual", "in-person": "in-person", "in person": "in-person"}

BOOKING_WINDOW_MONTHS = 3

# ---------------------------------------------------------------------------
# RE-PROMPTS
# ---------------------------------------------------------------------------

REPROMPTS = {
    Step.initial: "I didn't understand that. Please select an option:",
    Step.patient_info: "Please enter a valid name (letters and spaces only, 2-50 characters):",
    Step.symptoms_selection: "Please select valid symptoms from the list:",
    Step.specialization: "Please select a valid specialization from the list:",
    Step.consultation_type: "Please choose either Virtual or In-person:",
    Step.doctor: "Please select a valid doctor from the list:",
    Step.date: "Please enter a valid date in the format YYYY-MM-DD:",
    Step.time: "Please select one of the available time slots:",
    Step.contact_info: "Please enter a valid phone number (at least 10 digits):",
    Step.confirmation: "Please enter a valid email address:",
}
PAST_DATE_MESSAGE = "Please select a future date for your appointment:"
FAR_DATE_MESSAGE = "Please select a date within the next 3 months:"


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    normalized: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, normalized: Any) -> "ValidationResult":
        return cls(ok=True, normalized=normalized)

    @classmethod
    def failure(cls, error: str) -> "ValidationResult":
        return cls(ok=False, error=error)


# ---------------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------------

def add_months(value: datetime.date, months: int) -> datetime.date:
    """
    Add calendar months, clamping the day to the end of the target month
    (Nov 30 + 3 months = Feb 28/29).
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return datetime.date(year, month, day)


def booking_window(today: datetime.date):
    """(earliest, latest) bookable dates, both inclusive."""
    return today, add_months(today, BOOKING_WINDOW_MONTHS)


def specialization_choices(reference: ReferenceData, state: BookingState) -> List[SpecializationInfo]:
    """
    Specializations the patient may pick: the ones suggested from their
    symptoms, or the whole table when nothing was suggested yet.
    """
    if not state.suggested_specialization_ids:
        return list(reference.specializations)
    return [
        s for s in (reference.specialization(sid) for sid in state.suggested_specialization_ids)
        if s is not None
    ]


def doctor_choices(reference: ReferenceData, state: BookingState) -> List[DoctorInfo]:
    """
    Doctors of the chosen specialization, limited to the chosen consultation
    mode. Without a chosen specialization the whole doctor table is offered.
    """
    specialization_id = state.appointment.specialization_id
    if specialization_id is None:
        doctors = reference.doctors
    else:
        doctors = reference.doctors_for(specialization_id)
    consultation_type = state.appointment.consultation_type
    return [d for d in doctors if d.offers(consultation_type)]


def chosen_doctor(reference: ReferenceData, state: BookingState) -> DoctorInfo:
    doctor_id = state.appointment.doctor_id
    doctor = reference.doctor(doctor_id) if doctor_id is not None else None
    if doctor is None:
        raise MissingBookingInfo(f"Doctor {doctor_id!r} not found for this booking")
    return doctor


# ---------------------------------------------------------------------------
# STEP VALIDATORS
# ---------------------------------------------------------------------------

def validate_initial(text: str, **_) -> ValidationResult:
    """Any non-empty input is accepted; unknown choices are re-prompted by the flow."""
    if not text:
        return ValidationResult.failure(REPROMPTS[Step.initial])
    return ValidationResult.success(text)


def validate_name(text: str, **_) -> ValidationResult:
    if not NAME_PATTERN.match(text):
        return ValidationResult.failure(REPROMPTS[Step.patient_info])
    return ValidationResult.success(text)


def validate_symptoms(text: str, reference: ReferenceData, **_) -> ValidationResult:
    """Collect every known symptom mentioned anywhere in the input."""
    lowered = text.lower()
    matched = tuple(s.id for s in reference.symptoms if s.name.lower() in lowered)
    if not matched:
        return ValidationResult.failure(REPROMPTS[Step.symptoms_selection])
    return ValidationResult.success(matched)


def validate_specialization(text: str, reference: ReferenceData, state: BookingState, **_) -> ValidationResult:
    """Exact (case-sensitive) name, or the 1-based number of a listed option."""
    choices = specialization_choices(reference, state)
    for spec in choices:
        if spec.name == text:
            return ValidationResult.success(spec.id)
    if text.isdigit() and 1 <= int(text) <= len(choices):
        return ValidationResult.success(choices[int(text) - 1].id)
    return ValidationResult.failure(REPROMPTS[Step.specialization])


def validate_consultation_type(text: str, **_) -> ValidationResult:
    mode = CONSULTATION_TYPES.get(text.lower())
    if mode is None:
        return ValidationResult.failure(REPROMPTS[Step.consultation_type])
    return ValidationResult.success(mode)


def validate_doctor(text: str, reference: ReferenceData, state: BookingState, **_) -> ValidationResult:
    lowered = text.lower()
    for doctor in doctor_choices(reference, state):
        if doctor.name.lower() in lowered:
            return ValidationResult.success(doctor.id)
    return ValidationResult.failure(REPROMPTS[Step.doctor])


def validate_date(text: str, today: datetime.date, **_) -> ValidationResult:
    if not DATE_PATTERN.match(text):
        return ValidationResult.failure(REPROMPTS[Step.date])
    try:
        value = datetime.datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        # Well-formed but not a real calendar date, e.g. 2024-02-30
        return ValidationResult.failure(REPROMPTS[Step.date])

    earliest, latest = booking_window(today)
    if value < earliest:
        return ValidationResult.failure(PAST_DATE_MESSAGE)
    if value > latest:
        return ValidationResult.failure(FAR_DATE_MESSAGE)
    return ValidationResult.success(value)


def validate_time(text: str, reference: ReferenceData, state: BookingState, **_) -> ValidationResult:
    doctor = chosen_doctor(reference, state)
    if not TIME_PATTERN.match(text) or text not in doctor.time_slots:
        return ValidationResult.failure(REPROMPTS[Step.time])
    return ValidationResult.success(text)


def validate_contact(text: str, **_) -> ValidationResult:
    if not PHONE_PATTERN.match(text):
        return ValidationResult.failure(REPROMPTS[Step.contact_info])
    return ValidationResult.success(text)


def validate_email(text: str, **_) -> ValidationResult:
    if not EMAIL_PATTERN.match(text):
        return ValidationResult.failure(REPROMPTS[Step.confirmation])
    return ValidationResult.success(text)


VALIDATORS: Dict[Step, Callable[..., ValidationResult]] = {
    Step.initial: validate_initial,
    Step.patient_info: validate_name,
    Step.symptoms_selection: validate_symptoms,
    Step.specialization: validate_specialization,
    Step.consultation_type: validate_consultation_type,
    Step.doctor: validate_doctor,
    Step.date: validate_date,
    Step.time: validate_time,
    Step.contact_info: validate_contact,
    Step.confirmation: validate_email,
}

# Matched and stored exactly as typed
RAW_INPUT_STEPS = (Step.contact_info, Step.confirmation)


def validate(
    step: Step,
    raw_input: str,
    reference: ReferenceData,
    state: Optional[BookingState] = None,
    today: Optional[datetime.date] = None,
) -> ValidationResult:
    """
    Validate one chat message for the given step.

    Args:
        step: step the conversation is on
        raw_input: text typed or option clicked by the patient
        reference: reference data snapshot
        state: session state (suggested specializations, chosen doctor, ...)
        today: date used for the booking window, defaults to date.today()

    Returns:
        ValidationResult with the normalized value or the re-prompt message
    """
    text = raw_input or ""
    if step not in RAW_INPUT_STEPS:
        text = text.strip()
    result = VALIDATORS[step](
        text,
        reference=reference,
        state=state or BookingState(step=step),
        today=today or datetime.date.today(),
    )
    if not result.ok:
        logger.debug(f"Validation failed on step {step.value}: {text!r}")
    return result
