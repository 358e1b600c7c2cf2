"""
steps.py
========
Booking conversation steps.

    initial → patient-info → symptoms-selection → specialization
        → [consultation-type] → doctor → date → [time]
        → contact-info → confirmation

Bracketed steps only exist in the extended flow. Any step can jump back to
`initial` through a reset command.
"""

import enum
from typing import List, Optional


class Step(str, enum.Enum):
    """Position in the booking form; also the dispatch key for validation."""
    initial = "initial"
    patient_info = "patient-info"
    symptoms_selection = "symptoms-selection"
    specialization = "specialization"
    consultation_type = "consultation-type"
    doctor = "doctor"
    date = "date"
    time = "time"
    contact_info = "contact-info"
    confirmation = "confirmation"


BASIC_SEQUENCE: List[Step] = [
    Step.initial,
    Step.patient_info,
    Step.symptoms_selection,
    Step.specialization,
    Step.doctor,
    Step.date,
    Step.contact_info,
    Step.confirmation,
]

EXTENDED_SEQUENCE: List[Step] = [
    Step.initial,
    Step.patient_info,
    Step.symptoms_selection,
    Step.specialization,
    Step.consultation_type,
    Step.doctor,
    Step.date,
    Step.time,
    Step.contact_info,
    Step.confirmation,
]

RESET_COMMANDS = ("start over", "start from first")


def sequence_for(extended: bool) -> List[Step]:
    return EXTENDED_SEQUENCE if extended else BASIC_SEQUENCE


def next_step(step: Step, extended: bool = False) -> Optional[Step]:
    """
    Step that follows `step`, or None after confirmation.
    Extended-only steps always continue along the extended sequence.
    """
    sequence = sequence_for(extended or step not in BASIC_SEQUENCE)
    index = sequence.index(step)
    if index + 1 >= len(sequence):
        return None
    return sequence[index + 1]


def parse_step(value: Optional[str]) -> Optional[Step]:
    """Map a wire value like 'contact-info' to a Step, None if unknown."""
    if not value:
        return None
    try:
        return Step(value)
    except ValueError:
        return None


def is_reset_command(text: str) -> bool:
    return text.strip().lower() in RESET_COMMANDS
