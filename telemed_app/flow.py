"""
flow.py
=======
Step transition logic for the booking conversation.

One chat turn is:
  1. reset command check ("start over" / "start from first")
  2. step validation (validation.validate)
  3. transition to the next step, merging the new field into the appointment

Everything here is pure: the session state goes in as a BookingState and the
new state comes back in a TurnResult. The HTTP layer owns where states live.
"""

import datetime
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .appointment import Appointment, AccumulatorError
from .config import FlowConfig
from .medical_data import PROMPTS, START_OVER_OPTION
from .reference import DoctorInfo, ReferenceData
from .state import BookingState, MissingBookingInfo
from .steps import Step, is_reset_command, next_step
from . import validation

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "I couldn't find the information for your booking. Please start over."
ALREADY_CONFIRMED_MESSAGE = "Your appointment is already confirmed. Type 'Start over' to book another one."
NO_SPECIALIZATION_MESSAGE = (
    "I couldn't determine a specialization from those symptoms. "
    "Please describe your symptoms in more detail:"
)


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one chat turn."""
    state: BookingState
    message: str
    options: List[str] = field(default_factory=list)
    doctors: Tuple[DoctorInfo, ...] = ()
    # Appointment to report back; differs from state.appointment only after a
    # confirmed booking loops back to a fresh session
    appointment: Optional[Appointment] = None
    reset: bool = False

    @property
    def next_step(self) -> Step:
        return self.state.step

    @property
    def booking(self) -> Appointment:
        return self.appointment if self.appointment is not None else self.state.appointment


def prompt_message(step: Step) -> str:
    return PROMPTS[step.value][1]


def initial_options() -> List[str]:
    return list(PROMPTS[Step.initial.value][2])


def list_doctors(
    reference: ReferenceData,
    specialization_id: int,
    consultation_type: Optional[str] = None,
    by_rating: bool = False,
) -> List[DoctorInfo]:
    """
    Doctors of a specialization in table order. With `by_rating` the list is
    sorted best-rated first; equal ratings keep table order.
    """
    doctors = [d for d in reference.doctors_for(specialization_id) if d.offers(consultation_type)]
    if by_rating:
        doctors = sorted(doctors, key=lambda d: d.rating, reverse=True)
    return doctors


def suggest_specializations(reference: ReferenceData, symptom_ids) -> List[int]:
    """
    Specializations recommended by any disease sharing at least one symptom
    with the patient, deduplicated, in specialization table order.
    """
    wanted = set(symptom_ids)
    recommended = {
        disease.recommended_specialization
        for disease in reference.diseases
        if disease.common_symptoms & wanted
    }
    return [s.id for s in reference.specializations if s.id in recommended]


def start_over() -> TurnResult:
    return TurnResult(
        state=BookingState(),
        message=prompt_message(Step.initial),
        options=initial_options(),
        reset=True,
    )


# ---------------------------------------------------------------------------
# TRANSITIONS
# ---------------------------------------------------------------------------

def transition(
    step: Step,
    normalized,
    state: BookingState,
    reference: ReferenceData,
    flow: FlowConfig = FlowConfig(),
) -> TurnResult:
    """
    Move from `step` to the next one using an already validated value.

    Raises:
        MissingBookingInfo: a record needed by this step is not available
    """
    appointment = state.appointment
    following = next_step(step, flow.extended_flow)

    if step == Step.initial:
        choice = normalized.lower()
        if choice in ("book an appointment", "find a doctor"):
            return _advance(state, following, prompt_message(following))
        if choice == "get medical advice":
            return _advance(
                state, Step.symptoms_selection, "Please describe your symptoms:",
                options=reference.symptom_names(),
            )
        return TurnResult(state=state, message=validation.REPROMPTS[Step.initial], options=initial_options())

    if step == Step.patient_info:
        return _advance(
            state, following, prompt_message(following),
            options=reference.symptom_names(),
            appointment=appointment.merge(patient_name=normalized),
        )

    if step == Step.symptoms_selection:
        suggested = suggest_specializations(reference, normalized)
        if not suggested:
            return TurnResult(state=state, message=NO_SPECIALIZATION_MESSAGE, options=reference.symptom_names())
        names = [reference.specialization(sid).name for sid in suggested]
        symptom_names = tuple(s.name for s in reference.symptoms if s.id in normalized)
        return _advance(
            state, following,
            "Based on your symptoms, I recommend the following specializations:",
            options=names,
            appointment=appointment.merge(symptom_ids=tuple(normalized), symptom_names=symptom_names),
            suggested_specialization_ids=tuple(suggested),
        )

    if step == Step.specialization:
        specialization = reference.specialization(normalized)
        if specialization is None:
            raise MissingBookingInfo(f"Specialization {normalized!r} not found")
        merged = appointment.merge(specialization_id=specialization.id, specialization=specialization.name)

        if following == Step.consultation_type:
            return _advance(
                state, following, prompt_message(following),
                options=["Virtual", "In-person"], appointment=merged,
            )

        doctors = list_doctors(reference, specialization.id)
        if not doctors:
            return TurnResult(
                state=state,
                message=f"No doctors are currently available for {specialization.name}. "
                        "Please select another specialization:",
                options=[s.name for s in validation.specialization_choices(reference, state)],
            )
        return _offer_doctors(state, following, merged, doctors)

    if step == Step.consultation_type:
        if appointment.specialization_id is None:
            raise MissingBookingInfo("No specialization selected before the consultation type")
        doctors = list_doctors(reference, appointment.specialization_id, normalized, by_rating=True)
        if not doctors:
            return TurnResult(
                state=state,
                message=f"No {appointment.specialization} doctors offer {normalized} consultations. "
                        "Please choose another consultation type:",
                options=["Virtual", "In-person"],
            )
        return _offer_doctors(state, following, appointment.merge(consultation_type=normalized), doctors)

    if step == Step.doctor:
        doctor = reference.doctor(normalized)
        if doctor is None:
            raise MissingBookingInfo(f"Doctor {normalized!r} not found")
        return _advance(
            state, following, prompt_message(following),
            appointment=appointment.merge(doctor_id=doctor.id, doctor_name=doctor.name),
            offered_doctor_ids=(),
        )

    if step == Step.date:
        doctor = validation.chosen_doctor(reference, state)
        options = list(doctor.time_slots) if following == Step.time else None
        return _advance(
            state, following, prompt_message(following),
            options=options, appointment=appointment.merge(date=normalized),
        )

    if step == Step.time:
        return _advance(
            state, following, prompt_message(following),
            appointment=appointment.merge(time_slot=normalized),
        )

    if step == Step.contact_info:
        return _advance(
            state, following, prompt_message(following),
            appointment=appointment.merge(contact_number=normalized),
        )

    if step == Step.confirmation:
        booked = appointment.merge(email=normalized, confirmed=True)
        logger.info(f"✅ Appointment confirmed for {booked.patient_name or 'patient'} with {booked.doctor_name}")
        if flow.loop_after_confirmation:
            return TurnResult(
                state=BookingState(),
                message=booked.confirmation_message(),
                options=initial_options(),
                appointment=booked,
            )
        return TurnResult(
            state=state.advance(Step.confirmation, appointment=booked),
            message=booked.confirmation_message(),
            options=[START_OVER_OPTION],
        )

    raise ValueError(f"Unknown step: {step}")


def _advance(state: BookingState, step: Step, message: str, options=None, doctors=(), **changes) -> TurnResult:
    new_state = state.advance(step, **changes)
    logger.info(f"➡️ {state.step.value} -> {step.value}")
    return TurnResult(
        state=new_state,
        message=message,
        options=list(options or []),
        doctors=tuple(doctors),
    )


def _offer_doctors(state: BookingState, step: Step, appointment: Appointment, doctors: List[DoctorInfo]) -> TurnResult:
    return _advance(
        state, step, "Here are the available doctors in this specialization:",
        options=[d.name for d in doctors],
        doctors=doctors,
        appointment=appointment,
        offered_doctor_ids=tuple(d.id for d in doctors),
    )


# ---------------------------------------------------------------------------
# TURN HANDLING
# ---------------------------------------------------------------------------

def reprompt_options(step: Step, reference: ReferenceData, state: BookingState) -> List[str]:
    """Options re-listed after a failed validation."""
    if step == Step.initial:
        return initial_options()
    if step == Step.symptoms_selection:
        return reference.symptom_names()
    if step == Step.specialization:
        return [s.name for s in validation.specialization_choices(reference, state)]
    if step == Step.consultation_type:
        return ["Virtual", "In-person"]
    if step == Step.doctor:
        if state.offered_doctor_ids:
            return [reference.doctor(did).name for did in state.offered_doctor_ids if reference.doctor(did)]
        return [d.name for d in validation.doctor_choices(reference, state)]
    if step == Step.time:
        return list(validation.chosen_doctor(reference, state).time_slots)
    return []


def handle_turn(
    state: BookingState,
    raw_input: str,
    reference: ReferenceData,
    flow: FlowConfig = FlowConfig(),
    today: Optional[datetime.date] = None,
) -> TurnResult:
    """
    Process one patient message: reset check, validation, then transition.
    A failed validation keeps the step and answers with the step's re-prompt.
    """
    if is_reset_command(raw_input or ""):
        logger.info(f"🔄 Start over requested on step {state.step.value}")
        return start_over()

    step = state.step
    if step == Step.confirmation and state.appointment.confirmed:
        return TurnResult(state=state, message=ALREADY_CONFIRMED_MESSAGE, options=[START_OVER_OPTION])

    try:
        result = validation.validate(step, raw_input, reference, state=state, today=today)
        if not result.ok:
            return TurnResult(
                state=state,
                message=result.error,
                options=reprompt_options(step, reference, state),
            )
        return transition(step, result.normalized, state, reference, flow)
    except (MissingBookingInfo, AccumulatorError) as exc:
        logger.warning(f"⚠️ Booking information missing on step {step.value}: {exc}")
        return TurnResult(
            state=BookingState(),
            message=NOT_FOUND_MESSAGE,
            options=initial_options(),
            reset=True,
        )
